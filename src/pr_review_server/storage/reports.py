"""
Report Store

Persists rendered reviews as paired .html/.md files in a flat directory and
resolves stored files for the read route.
"""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Optional, Union

from ..errors import StorageError
from ..models.pr_content import PullRequestReference
from ..models.review import PersistedReview, ReviewDocument


logger = logging.getLogger(__name__)


ALLOWED_EXTENSIONS = ('.html', '.md')


def format_timestamp(moment: datetime) -> str:
    """UTC ISO-8601 with milliseconds, ':' and '.' replaced by '-'."""
    moment = moment.astimezone(timezone.utc)
    iso = moment.strftime('%Y-%m-%dT%H:%M:%S') + f".{moment.microsecond // 1000:03d}Z"
    return iso.replace(':', '-').replace('.', '-')


class ReportStore:
    """
    Flat-directory store for review reports.
    
    Files are named ``pr-review-{owner}-{repo}-{number}-{timestamp}.{ext}``;
    the directory listing is the only inventory.
    """
    
    def __init__(
        self,
        output_dir: Union[str, Path],
        public_base_url: str,
        clock: Optional[Callable[[], datetime]] = None
    ):
        """
        Initialize report store.
        
        Args:
            output_dir: Directory the reports are written to
            public_base_url: Base address of this server, e.g. http://localhost:3000
            clock: Returns the current time (overridable in tests)
        """
        self.output_dir = Path(output_dir)
        self.public_base_url = public_base_url.rstrip('/')
        self.clock = clock or (lambda: datetime.now(timezone.utc))
    
    def build_stem(self, reference: PullRequestReference) -> str:
        timestamp = format_timestamp(self.clock())
        return f"pr-review-{reference.owner}-{reference.repo}-{reference.number}-{timestamp}"
    
    def _ensure_directory(self) -> None:
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Cannot create reports directory {self.output_dir}: {e}") from e
    
    def _unique_stem(self, stem: str) -> str:
        """Append a counter if a report with the same stem already exists."""
        candidate = stem
        counter = 1
        while any((self.output_dir / f"{candidate}{ext}").exists() for ext in ALLOWED_EXTENSIONS):
            candidate = f"{stem}-{counter}"
            counter += 1
        return candidate
    
    def save(self, reference: PullRequestReference, document: ReviewDocument) -> PersistedReview:
        """
        Write the HTML and Markdown documents.
        
        Args:
            reference: Pull request the report belongs to
            document: Fully rendered report
            
        Returns:
            PersistedReview with both paths and the public HTML URL
            
        Raises:
            StorageError: On any filesystem failure; no file is left behind
        """
        self._ensure_directory()
        stem = self._unique_stem(self.build_stem(reference))
        
        html_path = self.output_dir / f"{stem}.html"
        md_path = self.output_dir / f"{stem}.md"
        
        created = []
        try:
            for path, text in ((html_path, document.html), (md_path, document.markdown)):
                with open(path, 'x', encoding='utf-8') as f:
                    created.append(path)
                    f.write(text)
        except OSError as e:
            # 일부만 쓰인 파일도 남기지 않음
            for path in created:
                path.unlink(missing_ok=True)
            raise StorageError(f"Failed to write review files {stem}.*: {e}") from e
        
        logger.info(f"Review saved to: {html_path} and {md_path}")
        
        return PersistedReview(
            html_path=str(html_path),
            markdown_path=str(md_path),
            public_html_url=f"{self.public_base_url}/reviews/{html_path.name}",
        )
    
    def resolve(self, filename: str) -> Path:
        """
        Return the path of a stored report file.
        
        Args:
            filename: Bare file name as used in the public URL
            
        Returns:
            Path to the file
            
        Raises:
            FileNotFoundError: Unknown, hidden or non-report file names
        """
        if (
            not filename
            or filename != Path(filename).name
            or '\\' in filename
            or filename.startswith('.')
            or Path(filename).suffix not in ALLOWED_EXTENSIONS
        ):
            raise FileNotFoundError(filename)
        
        path = self.output_dir / filename
        if not path.is_file():
            raise FileNotFoundError(filename)
        return path
