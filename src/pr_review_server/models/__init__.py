"""
Data Models

PR 리뷰 서버의 핵심 데이터 모델들
"""

from .pr_content import (
    PullRequestReference,
    ChangedFile,
    PullRequestContent,
    ReviewRequestBody,
)
from .review import ReviewDocument, PersistedReview, ReviewResponse, OutputFiles

__all__ = [
    "PullRequestReference",
    "ChangedFile",
    "PullRequestContent",
    "ReviewRequestBody",
    "ReviewDocument",
    "PersistedReview",
    "ReviewResponse",
    "OutputFiles",
]
