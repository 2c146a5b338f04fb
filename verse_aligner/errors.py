"""Error types raised by the merge and unmerge engines."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence


class AlignmentError(Exception):
    """Base class for every failure reported by the aligner."""

    kind: str = "alignment_error"

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.kind, "message": str(self)}


class CoverageError(AlignmentError):
    """Words of the verse string are missing from the alignment data."""

    kind = "coverage_error"

    def __init__(self, words: Sequence[str]) -> None:
        self.words: List[str] = list(words)
        joined = ", ".join(self.words)
        super().__init__(
            f'The words "{joined}" from the target language verse are not in the alignment data.'
        )

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["words"] = list(self.words)
        return data


class WordLookupError(AlignmentError, LookupError):
    """A word bank entry or bottom word has no match in the verse string."""

    kind = "lookup_error"

    def __init__(self, word: str, source: str = "alignment") -> None:
        self.word = word
        self.source = source
        if source == "word_bank":
            message = f"Word: {word} missing from word bank."
        else:
            message = f"Word: {word} not found in verse text while merging."
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["word"] = self.word
        data["source"] = self.source
        return data


class StructuralError(AlignmentError, ValueError):
    """Input data does not have the expected shape."""

    kind = "structural_error"

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None) -> None:
        self.errors: List[Dict[str, Any]] = list(errors or [])
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        if self.errors:
            data["errors"] = self.errors
        return data


__all__ = ["AlignmentError", "CoverageError", "StructuralError", "WordLookupError"]
