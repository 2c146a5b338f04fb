from __future__ import annotations

from typing import Any, Dict, List

from .config import AlignerSettings, get_settings
from .errors import AlignmentError, CoverageError, StructuralError, WordLookupError
from .models import (
    Alignment,
    Footnote,
    Marker,
    Milestone,
    Text,
    UnmergeResult,
    VerseObject,
    Word,
    WordObject,
    to_dicts,
)
from .services.merge import merge
from .services.unmerge import unmerge
from .utils.arrays import group_consecutive
from .verse_objects import (
    nest_milestones,
    recompute_occurrences,
    same_milestone,
    tokenize_to_verse_objects,
)


def merge_to_json(alignments: Any, word_bank: Any, verse_string: str) -> List[Dict[str, Any]]:
    """``merge`` returning the verse objects as plain dicts."""
    return to_dicts(merge(alignments, word_bank, verse_string))


def unmerge_to_json(verse_objects: Any, reference_ordering: Any = None) -> Dict[str, Any]:
    """``unmerge`` returning ``{"alignment": [...], "wordBank": [...]}``."""
    return unmerge(verse_objects, reference_ordering).to_dict()


__all__ = [
    "AlignerSettings",
    "Alignment",
    "AlignmentError",
    "CoverageError",
    "Footnote",
    "Marker",
    "Milestone",
    "StructuralError",
    "Text",
    "UnmergeResult",
    "VerseObject",
    "Word",
    "WordLookupError",
    "WordObject",
    "get_settings",
    "group_consecutive",
    "merge",
    "merge_to_json",
    "nest_milestones",
    "recompute_occurrences",
    "same_milestone",
    "to_dicts",
    "tokenize_to_verse_objects",
    "unmerge",
    "unmerge_to_json",
]
