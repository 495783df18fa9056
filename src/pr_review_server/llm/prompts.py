"""
Prompt Builder

Builds the two-message (system/user) chat prompt for PR review generation.
"""

import logging
from typing import Dict, List

from ..models.pr_content import PullRequestContent


logger = logging.getLogger(__name__)


SYSTEM_PROMPT = """You are an expert code reviewer. Your task is to perform a detailed and actionable code review of the provided Pull Request (PR) changes.

Focus on:
- Potential bugs or logical errors.
- Security vulnerabilities.
- Code quality, readability, and maintainability.
- Adherence to common best practices and design patterns.
- Performance bottlenecks.

For EACH identified issue, provide:
- A clear description of the problem.
- The **exact file name** where the issue is.
- The **approximate line number or range** where the issue is found (referencing the diff/patch is crucial).
- A **concrete suggestion** for how to fix or improve it.
- Use code snippets where appropriate to illustrate the fix.

If no issues are found, state that the code looks good and provide general positive feedback.
Present your feedback in a clear, bulleted, or numbered list format, using Markdown headings (##) for major sections (e.g., "Issues to Address", "Positive Feedback").

Example Issue Format:
## 1. Issue Title
* **File:** `filename.go` (around line X-Y)
* **Problem:** Description of the problem.
* **Suggestion:** Concrete suggestion with code snippet if applicable.

Example Positive Feedback Format:
## Positive Feedback
1. Point 1
2. Point 2

Start the review with a clear title like: '# Code Review: [PR Title] PR#[PR Number]'."""


class PromptBuilder:
    """
    Builds chat-completion messages for a pull request review.
    
    The system message is a fixed reviewer rubric; the user message
    carries the PR metadata and the aggregated diff.
    """
    
    def __init__(self, system_prompt: str = SYSTEM_PROMPT):
        self.system_prompt = system_prompt
    
    def build_user_prompt(self, content: PullRequestContent, diff_text: str) -> str:
        """
        Build the user message for a pull request.
        
        Args:
            content: Pull request metadata and files
            diff_text: Output of the diff aggregator
            
        Returns:
            User prompt text
        """
        lines = [
            "Review the following Pull Request details and code changes.",
            "",
            f"**Pull Request Title:** {content.title}",
            f"**PR URL:** {content.url}",
            f"**Author:** {content.author}",
        ]
        
        if content.body:
            lines.append(f"**PR Description:**\n{content.body}")
        
        lines.extend([
            "",
            "**Changed Files and their Diffs (Patches):**",
            "```diff",
            diff_text,
            "```",
            "",
            "Please provide your detailed code review based on the instructions.",
        ])
        
        return "\n".join(lines)
    
    def build_messages(self, content: PullRequestContent, diff_text: str) -> List[Dict[str, str]]:
        """
        Build the ordered system/user messages.
        
        Args:
            content: Pull request metadata and files
            diff_text: Output of the diff aggregator
            
        Returns:
            List of two role-tagged messages
        """
        logger.debug(f"Building review prompt for PR #{content.number} ({len(diff_text)} diff chars)")
        
        return [
            {"role": "system", "content": self.system_prompt},
            {"role": "user", "content": self.build_user_prompt(content, diff_text)},
        ]
