"""
Diff Aggregator

Flattens changed-file patches into one annotated diff blob for the prompt.
"""

import logging
from typing import Iterable

from ..models.pr_content import ChangedFile


logger = logging.getLogger(__name__)


NO_CHANGES_SENTINEL = "No code changes detected in this PR."


def file_separator(changed_file: ChangedFile) -> str:
    """Header line that precedes each file's patch."""
    return f"--- File: {changed_file.filename} (Status: {changed_file.status}) ---"


def aggregate_patches(files: Iterable[ChangedFile]) -> str:
    """
    Concatenate the patches of all changed files in input order.
    
    Files without a patch (binary files, pure renames) contribute nothing.
    
    Args:
        files: Changed files of a pull request
        
    Returns:
        Annotated diff text, or NO_CHANGES_SENTINEL when no file has a patch
    """
    parts = []
    skipped = 0
    
    for changed_file in files:
        if not changed_file.has_patch:
            skipped += 1
            continue
        parts.append(f"\n{file_separator(changed_file)}\n{changed_file.patch}\n")
    
    if skipped:
        logger.debug(f"Skipped {skipped} files without patch")
    
    if not parts:
        return NO_CHANGES_SENTINEL
    
    return "".join(parts)
