"""
Main PR Review API

Main interface that orchestrates the complete review process
from PR link validation to a stored, browsable report.
"""

import logging
from typing import Any, Mapping, Optional
from datetime import datetime

from pydantic import ValidationError

from .config import AppConfig
from .errors import (
    InternalError,
    InvalidInput,
    ReviewError,
    UpstreamForbidden,
    UpstreamNotFound,
)
from .github.client import GitHubClient, GitHubAPIError
from .github.parser import PRContentParser, parse_pr_url
from .review.diff import aggregate_patches
from .llm.prompts import PromptBuilder
from .llm.client import ModelClient
from .formatting.report import ReportRenderer
from .storage.reports import ReportStore
from .models.pr_content import PullRequestContent, PullRequestReference, ReviewRequestBody
from .models.review import ReviewDocument, ReviewResponse


logger = logging.getLogger(__name__)


class PRReviewAPI:
    """
    Main PR Review API interface.

    Orchestrates the complete review process:
    1. Validate the PR link
    2. Collect PR metadata and changed files from GitHub
    3. Build the prompt and call the model
    4. Render the report and persist it
    """

    def __init__(
        self,
        config: AppConfig,
        github_client: Optional[GitHubClient] = None,
        model_client: Optional[ModelClient] = None,
        report_store: Optional[ReportStore] = None
    ):
        """
        Initialize PR Review API.

        Args:
            config: Application configuration
            github_client: Optional pre-built GitHub client
            model_client: Optional pre-built model client
            report_store: Optional pre-built report store
        """
        self.config = config

        logger.info("Initializing PR Review API components...")

        # GitHub integration
        self.github_client = github_client or GitHubClient(
            config.github.token,
            base_url=config.github.api_base_url,
            timeout=config.github.timeout_seconds
        )
        self.pr_parser = PRContentParser()

        # LLM
        self.prompt_builder = PromptBuilder()
        self.model_client = model_client or ModelClient.from_config(
            config.model,
            referer=config.server.base_url
        )

        # Report rendering and storage
        self.renderer = ReportRenderer(language=config.report.language)
        self.report_store = report_store or ReportStore(
            config.report.output_dir,
            public_base_url=config.server.base_url
        )

        logger.info("PR Review API initialized successfully")

    def review_pull_request(self, body: Optional[Mapping[str, Any]]) -> ReviewResponse:
        """
        Generate, store and return a review for the PR in the request body.

        Args:
            body: Decoded JSON request body, expected to carry ``prLink``

        Returns:
            ReviewResponse for the success payload

        Raises:
            ReviewError: Subclass matching the failed step
        """
        start_time = datetime.now()

        pr_link = self._validate_request(body)
        reference = parse_pr_url(pr_link)

        logger.info(f"Starting review generation: {reference}")

        try:
            content = self._collect_pr_data(reference)
            review_markdown = self._generate_review(content)
            document = self._render_report(content, review_markdown)

            # 두 문서를 모두 만든 뒤에만 저장
            persisted = self.report_store.save(reference, document)
        except ReviewError as e:
            logger.error(f"Review generation failed: {reference} - {e}")
            raise

        processing_time = (datetime.now() - start_time).total_seconds()
        logger.info(f"Review generation completed: {reference} ({processing_time:.2f}s)")

        return ReviewResponse.from_results(content.url, document, persisted)

    def _validate_request(self, body: Optional[Mapping[str, Any]]) -> str:
        """Return the PR link from the request body."""
        if not isinstance(body, Mapping) or not body.get('prLink'):
            raise InvalidInput("Please provide a pull request link in the request body (prLink).")

        try:
            request = ReviewRequestBody.model_validate(body)
        except ValidationError as e:
            raise InvalidInput(
                "Invalid request body: prLink must be a non-empty string.",
                details=e.errors(include_url=False, include_context=False, include_input=False)
            ) from e

        return request.pr_link

    def _collect_pr_data(self, reference: PullRequestReference) -> PullRequestContent:
        """Fetch PR metadata and changed files and build PullRequestContent."""
        logger.info(f"Collecting PR data for {reference}")

        try:
            pr_data = self.github_client.get_pull_request(
                reference.owner, reference.repo, reference.number
            )
            files_data = self.github_client.get_pull_request_files(
                reference.owner, reference.repo, reference.number
            )
        except GitHubAPIError as e:
            raise self._translate_github_error(e) from e

        try:
            return self.pr_parser.parse(pr_data, files_data)
        except (KeyError, TypeError, ValueError) as e:
            raise InternalError(f"Unexpected GitHub response for {reference}: {e}") from e

    @staticmethod
    def _translate_github_error(error: GitHubAPIError) -> ReviewError:
        if error.status_code == 404:
            return UpstreamNotFound(
                "Pull request or repository not found.",
                details=error.response_data
            )
        if error.status_code == 403:
            return UpstreamForbidden(
                "GitHub API access denied. Make sure GITHUB_TOKEN has sufficient permissions.",
                details=error.response_data
            )
        return InternalError(f"Internal server error: {error}", details=error.response_data)

    def _generate_review(self, content: PullRequestContent) -> str:
        """Build the prompt and obtain the model's Markdown review."""
        logger.info(f"Generating AI review for PR #{content.number}")

        diff_text = aggregate_patches(content.files)
        messages = self.prompt_builder.build_messages(content, diff_text)

        return self.model_client.complete(messages)

    def _render_report(self, content: PullRequestContent, review_markdown: str) -> ReviewDocument:
        """Render the full Markdown/HTML report."""
        try:
            return self.renderer.render(content, review_markdown)
        except ValueError as e:
            raise InternalError(f"Failed to render review report: {e}") from e
