"""
Review Report Models

렌더링된 리뷰 문서, 저장 결과, API 응답 모델들
"""

from dataclasses import dataclass
from typing import Literal
from pydantic import BaseModel


@dataclass(frozen=True)
class ReviewDocument:
    """Markdown 원문과 HTML 렌더링 결과"""
    markdown: str
    html: str

    def __post_init__(self):
        """데이터 검증"""
        if not self.markdown.strip():
            raise ValueError("Markdown cannot be empty")
        if not self.html.strip():
            raise ValueError("HTML cannot be empty")


@dataclass(frozen=True)
class PersistedReview:
    """디스크에 저장된 리뷰 파일 위치"""
    html_path: str
    markdown_path: str
    public_html_url: str


# Pydantic models for API responses
class OutputFiles(BaseModel):
    """저장된 파일 경로"""
    html: str
    markdown: str


class ReviewResponse(BaseModel):
    """POST /review-pull-request 성공 응답"""
    status: Literal["success"] = "success"
    pull_request_url: str
    ai_review_markdown: str
    ai_review_html_url: str
    output_files: OutputFiles

    @classmethod
    def from_results(
        cls,
        pull_request_url: str,
        document: ReviewDocument,
        persisted: PersistedReview,
    ) -> "ReviewResponse":
        """렌더링/저장 결과로 응답 생성"""
        return cls(
            pull_request_url=pull_request_url,
            ai_review_markdown=document.markdown,
            ai_review_html_url=persisted.public_html_url,
            output_files=OutputFiles(
                html=persisted.html_path,
                markdown=persisted.markdown_path,
            ),
        )
