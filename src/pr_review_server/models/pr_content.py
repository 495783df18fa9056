"""
Pull Request Content Models

Pull Request 참조, 변경 파일, PR 콘텐츠 데이터 모델들
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field, field_validator


@dataclass(frozen=True)
class PullRequestReference:
    """owner/repo/number 로 식별되는 Pull Request"""
    owner: str
    repo: str
    number: int

    def __post_init__(self):
        """데이터 검증"""
        if not self.owner or not self.repo:
            raise ValueError("Owner and repo must be non-empty")
        if '/' in self.owner or '/' in self.repo:
            raise ValueError("Owner and repo must not contain '/'")
        if self.number <= 0:
            raise ValueError("PR number must be positive")

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"

    def __str__(self) -> str:
        return f"{self.owner}/{self.repo}#{self.number}"


@dataclass(frozen=True)
class ChangedFile:
    """PR 에서 변경된 파일"""
    filename: str
    status: str  # 'added', 'modified', 'removed', 'renamed', ...
    additions: int = 0
    deletions: int = 0
    patch: Optional[str] = None

    def __post_init__(self):
        """데이터 검증"""
        if not self.filename:
            raise ValueError("Filename cannot be empty")
        if self.additions < 0 or self.deletions < 0:
            raise ValueError("Addition and deletion counts must be non-negative")

    @property
    def has_patch(self) -> bool:
        """바이너리 등 patch 가 없는 파일은 False"""
        return bool(self.patch)


@dataclass(frozen=True)
class PullRequestContent:
    """리뷰 대상 PR 의 메타데이터와 변경 파일 목록"""
    number: int
    title: str
    url: str
    author: str
    created_at: str
    updated_at: str
    base_ref: str
    head_ref: str
    body: Optional[str] = None
    files: Tuple[ChangedFile, ...] = field(default_factory=tuple)

    def __post_init__(self):
        """데이터 검증"""
        if self.number <= 0:
            raise ValueError("PR number must be positive")
        # list 로 넘어와도 불변 tuple 로 고정
        object.__setattr__(self, 'files', tuple(self.files))

    @property
    def total_additions(self) -> int:
        return sum(f.additions for f in self.files)

    @property
    def total_deletions(self) -> int:
        return sum(f.deletions for f in self.files)

    @property
    def files_without_patch(self) -> Tuple[ChangedFile, ...]:
        """diff 가 없는 (리뷰되지 않는) 파일들"""
        return tuple(f for f in self.files if not f.has_patch)


# Pydantic model for API validation
class ReviewRequestBody(BaseModel):
    """POST /review-pull-request 요청 본문"""
    model_config = ConfigDict(populate_by_name=True)

    pr_link: str = Field(alias="prLink")

    @field_validator('pr_link')
    @classmethod
    def validate_pr_link(cls, v):
        if not v.strip():
            raise ValueError('prLink cannot be empty')
        return v.strip()
