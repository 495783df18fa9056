"""
GitHub Integration Layer

This module provides GitHub API access for pull request metadata and
changed-file retrieval, plus PR link parsing.
"""

from .client import GitHubClient, GitHubAPIError
from .parser import PRContentParser, parse_pr_url

__all__ = ['GitHubClient', 'GitHubAPIError', 'PRContentParser', 'parse_pr_url']
