"""
PR Review Server

GitHub Pull Request 링크를 받아 AI 코드 리뷰 리포트를 생성하는 서버
"""

__version__ = "1.0.0"

from .api import PRReviewAPI
from .config import AppConfig

__all__ = ["PRReviewAPI", "AppConfig", "__version__"]
