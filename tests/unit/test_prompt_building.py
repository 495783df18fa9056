"""
Unit tests for diff aggregation and prompt construction.
"""

import dataclasses

from pr_review_server.llm.prompts import PromptBuilder, SYSTEM_PROMPT
from pr_review_server.models.pr_content import ChangedFile
from pr_review_server.review.diff import NO_CHANGES_SENTINEL, aggregate_patches


class TestAggregatePatches:
    """Unit tests for the diff aggregator."""

    def test_no_files(self):
        assert aggregate_patches([]) == NO_CHANGES_SENTINEL

    def test_only_files_without_patch(self):
        files = [ChangedFile('logo.png', 'added'), ChangedFile('old.txt', 'renamed', patch='')]

        assert aggregate_patches(files) == NO_CHANGES_SENTINEL

    def test_format(self):
        files = [
            ChangedFile('a.py', 'modified', 1, 1, '-x\n+y'),
            ChangedFile('logo.png', 'added'),
            ChangedFile('b.py', 'added', 2, 0, '+z\n+w'),
        ]

        assert aggregate_patches(files) == (
            "\n--- File: a.py (Status: modified) ---\n-x\n+y\n"
            "\n--- File: b.py (Status: added) ---\n+z\n+w\n"
        )


class TestPromptBuilder:
    """Unit tests for PromptBuilder."""

    def test_messages_order_and_roles(self, pr_content):
        messages = PromptBuilder().build_messages(pr_content, "diff text")

        assert [m['role'] for m in messages] == ['system', 'user']
        assert messages[0]['content'] == SYSTEM_PROMPT

    def test_system_prompt_rubric(self):
        for phrase in (
            "Potential bugs",
            "Security vulnerabilities",
            "readability",
            "best practices",
            "Performance",
            "**exact file name**",
            "**approximate line number or range**",
            "**concrete suggestion**",
            "If no issues are found",
            "Markdown headings (##)",
            "# Code Review: [PR Title] PR#[PR Number]",
        ):
            assert phrase in SYSTEM_PROMPT

    def test_user_prompt_contents(self, pr_content):
        user = PromptBuilder().build_user_prompt(pr_content, "+added line")

        assert "**Pull Request Title:** Fix off-by-one" in user
        assert "**PR URL:** https://github.com/acme/widgets/pull/42" in user
        assert "**Author:** octocat" in user
        assert "**PR Description:**\nLoop bound was inclusive." in user
        assert "```diff\n+added line\n```" in user

    def test_user_prompt_without_description(self, pr_content):
        content = dataclasses.replace(pr_content, body=None)

        user = PromptBuilder().build_user_prompt(content, "x")

        assert "PR Description" not in user

    def test_sentinel_reaches_prompt(self, pr_content):
        content = dataclasses.replace(pr_content, files=(ChangedFile('logo.png', 'added'),))

        messages = PromptBuilder().build_messages(content, aggregate_patches(content.files))

        assert f"```diff\n{NO_CHANGES_SENTINEL}\n```" in messages[1]['content']
