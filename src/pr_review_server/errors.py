"""
Error Taxonomy

리뷰 파이프라인에서 발생하는 에러와 HTTP 상태 코드 매핑
"""

from typing import Any, Dict, Optional


class ReviewError(Exception):
    """Base error for the review pipeline."""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[Any] = None
    ):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the JSON error body."""
        payload: Dict[str, Any] = {"error": self.message}
        if self.details is not None:
            payload["details"] = self.details
        return payload


class InvalidInput(ReviewError):
    """Missing or malformed pull request link."""
    status_code = 400


class UpstreamNotFound(ReviewError):
    """Pull request or repository does not exist on the source-control host."""
    status_code = 404


class UpstreamForbidden(ReviewError):
    """Source-control host refused access with the configured token."""
    status_code = 403


class InternalError(ReviewError):
    """Any failure not attributable to the caller."""
    status_code = 500


class ModelCallFailed(InternalError):
    """Chat-completion request failed or returned an unusable body."""

    def __init__(
        self,
        message: str,
        upstream_status: Optional[int] = None,
        details: Optional[Any] = None
    ):
        super().__init__(message, details=details)
        self.upstream_status = upstream_status


class StorageError(InternalError):
    """Report files could not be written or read."""
