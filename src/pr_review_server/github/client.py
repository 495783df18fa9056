"""
GitHub API Client

Handles GitHub API authentication and communication.
Provides methods for pull request metadata and changed-file retrieval.
"""

import logging
from typing import Any, Dict, Iterator, List, Optional
import requests


logger = logging.getLogger(__name__)

FILES_PER_PAGE = 100
MAX_FILE_PAGES = 30


class GitHubAPIError(Exception):
    """GitHub API related errors"""
    def __init__(self, message: str, status_code: Optional[int] = None, response_data: Optional[Any] = None):
        super().__init__(message)
        self.status_code = status_code
        self.response_data = response_data


class GitHubClient:
    """
    GitHub API client with static token authentication.
    
    Provides methods for:
    - Pull request metadata retrieval
    - Changed-file listing (paginated)
    """
    
    def __init__(
        self,
        token: Optional[str],
        base_url: str = "https://api.github.com",
        timeout: float = 30,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize GitHub client.
        
        Args:
            token: GitHub personal access token (None for anonymous access)
            base_url: GitHub API base URL (default: https://api.github.com)
            timeout: Per-request timeout in seconds
            session: Optional pre-built session (used by tests)
        """
        self.token = token
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session or self._create_session()
        
    def _create_session(self) -> requests.Session:
        """Create requests session with authentication headers."""
        session = requests.Session()
        
        headers = {
            'Accept': 'application/vnd.github.v3+json',
            'User-Agent': 'PR-Review-Server/1.0'
        }
        if self.token:
            headers['Authorization'] = f'token {self.token}'
        session.headers.update(headers)
        
        return session
    
    def _make_request(self, method: str, endpoint: str, **kwargs) -> requests.Response:
        """
        Make authenticated request to GitHub API.
        
        Args:
            method: HTTP method (GET, POST, etc.)
            endpoint: API endpoint (without base URL)
            **kwargs: Additional arguments for requests
            
        Returns:
            Response object
            
        Raises:
            GitHubAPIError: For transport failures and non-2xx responses
        """
        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        kwargs.setdefault('timeout', self.timeout)
        
        try:
            response = self.session.request(method, url, **kwargs)
        except requests.RequestException as e:
            logger.error(f"Request failed: {e}")
            raise GitHubAPIError(f"Request failed: {str(e)}") from e
        
        if not response.ok:
            error_data = self._error_body(response)
            message = error_data.get('message', 'Unknown error') if isinstance(error_data, dict) else error_data
            raise GitHubAPIError(
                f"GitHub API error: {response.status_code} - {message}",
                status_code=response.status_code,
                response_data=error_data
            )
        
        return response
    
    @staticmethod
    def _error_body(response: requests.Response) -> Any:
        """Decode an error body, falling back to raw text."""
        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError:
            return response.text
    
    def _get_json(self, endpoint: str, **kwargs) -> Any:
        """GET an endpoint and decode its JSON body."""
        response = self._make_request('GET', endpoint, **kwargs)
        try:
            return response.json()
        except ValueError as e:
            raise GitHubAPIError(
                f"Malformed JSON from GitHub for {endpoint}",
                status_code=response.status_code,
                response_data=response.text
            ) from e
    
    def get_pull_request(self, owner: str, repo: str, pr_number: int) -> Dict:
        """Return the raw pull request object for ``owner/repo#pr_number``."""
        logger.info(f"Requesting pull request {owner}/{repo}#{pr_number}")
        return self._get_json(f'/repos/{owner}/{repo}/pulls/{pr_number}')
    
    def _iter_file_pages(self, owner: str, repo: str, pr_number: int) -> Iterator[List[Dict]]:
        """
        Yield changed-file pages until a short page.
        
        GitHub lists at most 3000 files for a pull request, so iteration
        also stops after MAX_FILE_PAGES pages.
        """
        endpoint = f'/repos/{owner}/{repo}/pulls/{pr_number}/files'
        
        for page in range(1, MAX_FILE_PAGES + 1):
            batch = self._get_json(endpoint, params={'page': page, 'per_page': FILES_PER_PAGE})
            if not isinstance(batch, list):
                raise GitHubAPIError(
                    f"Expected a list of files on page {page}, got {type(batch).__name__}",
                    response_data=batch
                )
            if batch:
                yield batch
            if len(batch) < FILES_PER_PAGE:
                return
        
        logger.warning(f"Stopped listing files for {owner}/{repo}#{pr_number} after {MAX_FILE_PAGES} pages")
    
    def get_pull_request_files(self, owner: str, repo: str, pr_number: int) -> List[Dict]:
        """
        Collect every changed file of a pull request.
        
        Returns:
            File objects in the order GitHub lists them
        """
        files = [
            entry
            for batch in self._iter_file_pages(owner, repo, pr_number)
            for entry in batch
        ]
        logger.info(f"{owner}/{repo}#{pr_number} changes {len(files)} file(s)")
        return files
