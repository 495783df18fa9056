"""
Pull Request Parser

Parses GitHub PR links into references and GitHub API payloads into
structured PullRequestContent objects.
"""

import re
import logging
from typing import Dict, List, Optional

from ..errors import InvalidInput
from ..models.pr_content import ChangedFile, PullRequestContent, PullRequestReference


logger = logging.getLogger(__name__)


PR_URL_PATTERN = re.compile(r'^(?:https?://)?(?:www\.)?github\.com/([^/]+)/([^/]+)/pull/(\d+)', re.IGNORECASE)

INVALID_LINK_MESSAGE = (
    "Invalid pull request link format. "
    "Expected something like: https://github.com/owner/repo/pull/123"
)


def parse_pr_url(pr_link: Optional[str]) -> PullRequestReference:
    """
    Extract owner, repo and number from a GitHub PR link.
    
    The link must start with the github.com host. Anything after the PR
    number (``/files``, query string, fragment, trailing slash) is ignored.
    
    Args:
        pr_link: Pull request URL
        
    Returns:
        PullRequestReference
        
    Raises:
        InvalidInput: If the link is missing or does not match the pattern
    """
    if not pr_link:
        raise InvalidInput("Please provide a pull request link in the request body (prLink).")
    
    match = PR_URL_PATTERN.match(pr_link.strip())
    if not match:
        raise InvalidInput(INVALID_LINK_MESSAGE)
    
    owner, repo, number = match.group(1), match.group(2), int(match.group(3))
    try:
        return PullRequestReference(owner=owner, repo=repo, number=number)
    except ValueError as e:
        raise InvalidInput(f"{INVALID_LINK_MESSAGE} ({e})") from e


class PRContentParser:
    """
    Parser for GitHub PR payloads.
    
    Converts the pull request and changed-file responses of the GitHub
    REST API into an immutable PullRequestContent.
    """
    
    def parse(self, pr_data: Dict, files_data: List[Dict]) -> PullRequestContent:
        """
        Parse PR data and files into a PullRequestContent object.
        
        Args:
            pr_data: PR information from GitHub API
            files_data: List of file changes from GitHub API
            
        Returns:
            Structured PullRequestContent object
        """
        logger.info(f"Parsing PR content for #{pr_data.get('number')}")
        
        files = [self._parse_file(file_data) for file_data in files_data]
        
        content = PullRequestContent(
            number=pr_data['number'],
            title=pr_data.get('title') or '',
            url=pr_data.get('html_url') or '',
            author=(pr_data.get('user') or {}).get('login', ''),
            created_at=pr_data.get('created_at') or '',
            updated_at=pr_data.get('updated_at') or '',
            base_ref=(pr_data.get('base') or {}).get('ref', ''),
            head_ref=(pr_data.get('head') or {}).get('ref', ''),
            body=pr_data.get('body') or None,
            files=tuple(files),
        )
        
        logger.info(
            f"Parsed PR content: {len(files)} files, "
            f"+{content.total_additions}/-{content.total_deletions}, "
            f"{len(content.files_without_patch)} without patch"
        )
        return content
    
    def _parse_file(self, file_data: Dict) -> ChangedFile:
        """
        Parse individual file change data.
        
        Args:
            file_data: File change data from GitHub API
            
        Returns:
            ChangedFile; ``patch`` stays None for binary or content-less changes
        """
        logger.debug(f"Parsing file change: {file_data['filename']}")
        
        return ChangedFile(
            filename=file_data['filename'],
            status=file_data.get('status', 'modified'),
            additions=file_data.get('additions', 0),
            deletions=file_data.get('deletions', 0),
            patch=file_data.get('patch') or None,
        )
