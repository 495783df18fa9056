"""
Report Renderer

Wraps the model's Markdown review with a header and footer and renders the
whole document to a standalone HTML page.
"""

import html
import logging
from typing import Dict

import markdown

from ..models.pr_content import PullRequestContent
from ..models.review import ReviewDocument


logger = logging.getLogger(__name__)


MARKDOWN_EXTENSIONS = ['fenced_code', 'tables', 'sane_lists']

TEMPLATES: Dict[str, Dict[str, str]] = {
    "id": {
        "header": (
            "✨ **Laporan Code Review Otomatis** ✨\n"
            "\n"
            "---\n"
            "\n"
            "Halo tim! 👋 Saya telah selesai me-review Pull Request ini:\n"
            "**{title} (PR #{number})**\n"
            "🔗 Link PR: {url}\n"
            "\n"
            "Review ini difokuskan pada potensi masalah, keamanan, dan praktik terbaik.\n"
            "Mohon perhatikan detail di bawah ini untuk perbaikan.\n\n"
        ),
        "footer": (
            "\n\n"
            "---\n"
            "\n"
            "**Catatan:** Review ini dihasilkan oleh AI. "
            "Pertimbangkan saran-saran ini dan diskusikan dengan tim Anda.\n"
            "🤖 Semangat Coding!"
        ),
    },
    "en": {
        "header": (
            "✨ **Automated Code Review Report** ✨\n"
            "\n"
            "---\n"
            "\n"
            "Hi team! 👋 I have finished reviewing this Pull Request:\n"
            "**{title} (PR #{number})**\n"
            "🔗 PR link: {url}\n"
            "\n"
            "This review focuses on potential issues, security and best practices.\n"
            "Please go through the details below.\n\n"
        ),
        "footer": (
            "\n\n"
            "---\n"
            "\n"
            "**Note:** This review was generated by AI. "
            "Weigh these suggestions and discuss them with your team.\n"
            "🤖 Happy coding!"
        ),
    },
}

HTML_SHELL = """<!DOCTYPE html>
<html lang="{lang}">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{title}</title>
    <style>
        body {{ font-family: 'Segoe UI', Tahoma, Geneva, Verdana, sans-serif; line-height: 1.6; margin: 20px; background-color: #f4f7f6; color: #333; }}
        .container {{ max-width: 900px; margin: auto; background: #fff; padding: 30px; border-radius: 8px; box-shadow: 0 4px 8px rgba(0,0,0,0.1); }}
        h1, h2, h3, h4, h5, h6 {{ color: #2c3e50; margin-top: 1.5em; margin-bottom: 0.5em; }}
        h1 {{ border-bottom: 2px solid #3498db; padding-bottom: 10px; margin-bottom: 20px; }}
        h2 {{ border-bottom: 1px solid #eee; padding-bottom: 5px; margin-bottom: 15px; }}
        code {{ background-color: #eee; padding: 2px 4px; border-radius: 4px; font-family: 'Consolas', 'Monaco', monospace; }}
        pre {{ background-color: #2d2d2d; color: #f8f8f2; padding: 15px; border-radius: 5px; overflow-x: auto; margin: 1em 0; }}
        pre code {{ background-color: transparent; padding: 0; }}
        strong {{ color: #e74c3c; }}
        ul {{ list-style-type: disc; margin-left: 20px; }}
        table {{ border-collapse: collapse; margin: 1em 0; }}
        th, td {{ border: 1px solid #ddd; padding: 6px 10px; }}
        a {{ color: #3498db; text-decoration: none; }}
        a:hover {{ text-decoration: underline; }}
    </style>
</head>
<body>
    <div class="container">
{content}
    </div>
</body>
</html>"""


class ReportRenderer:
    """
    Renders review reports.
    
    Produces the full Markdown document (header + review + footer) and an
    HTML page rendered from it. No I/O.
    """
    
    def __init__(self, language: str = "id"):
        """
        Initialize report renderer.
        
        Args:
            language: Header/footer language ("id" or "en")
        """
        if language not in TEMPLATES:
            raise ValueError(f"Unsupported report language: {language}")
        self.language = language
        self.templates = TEMPLATES[language]
    
    def build_markdown(self, content: PullRequestContent, review_markdown: str) -> str:
        """Concatenate header, model review and footer."""
        header = self.templates["header"].format(
            title=content.title,
            number=content.number,
            url=content.url,
        )
        return header + review_markdown + self.templates["footer"]
    
    def to_html(self, content: PullRequestContent, full_markdown: str) -> str:
        """Convert Markdown to a standalone HTML page."""
        body_html = markdown.markdown(full_markdown, extensions=MARKDOWN_EXTENSIONS)
        page_title = html.escape(f"Code Review: {content.title} #{content.number}")
        return HTML_SHELL.format(lang=self.language, title=page_title, content=body_html)
    
    def render(self, content: PullRequestContent, review_markdown: str) -> ReviewDocument:
        """
        Render the report for a pull request.
        
        Args:
            content: Pull request the review belongs to
            review_markdown: Raw Markdown answer of the model
            
        Returns:
            ReviewDocument with the full Markdown and HTML
        """
        full_markdown = self.build_markdown(content, review_markdown)
        document = ReviewDocument(
            markdown=full_markdown,
            html=self.to_html(content, full_markdown),
        )
        logger.debug(f"Rendered report for PR #{content.number}: {len(document.html)} HTML chars")
        return document
