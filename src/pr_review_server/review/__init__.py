"""
Review Processing

Diff aggregation for the review prompt.
"""

from .diff import aggregate_patches, NO_CHANGES_SENTINEL

__all__ = ['aggregate_patches', 'NO_CHANGES_SENTINEL']
