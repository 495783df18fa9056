"""
Report Storage

File-based persistence for rendered review reports.
"""

from .reports import ReportStore

__all__ = ['ReportStore']
