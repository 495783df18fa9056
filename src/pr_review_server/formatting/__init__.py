"""
Report Formatting

This module renders review reports as Markdown and HTML.
"""

from .report import ReportRenderer

__all__ = ['ReportRenderer']
