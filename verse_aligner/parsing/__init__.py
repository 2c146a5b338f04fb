"""Text collaborators: markup segmentation and word tokenization."""

from .markup import parse_segments, segments_text
from .tokenizer import (
    is_word,
    occurrence_in_string,
    occurrences_in_string,
    tokenize,
    tokenize_with_punctuation,
)

__all__ = [
    "is_word",
    "occurrence_in_string",
    "occurrences_in_string",
    "parse_segments",
    "segments_text",
    "tokenize",
    "tokenize_with_punctuation",
]
