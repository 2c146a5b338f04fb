"""Word and punctuation tokenization of plain verse text."""

from __future__ import annotations

from typing import List

import regex

# Letters, marks (vowel signs, viramas, Greek breathings, Hebrew points) and digits.
# ZWJ and word joiner keep conjuncts such as Malayalam chillu forms in one word.
WORD_CHARS = r"\p{L}\p{M}\p{N}\u200d\u2060"

# Apostrophes and hyphens only count as part of a word between word characters
WORD_JOINERS = r"'\u2019\-\u2010\u2011"

WORD_REGEX = regex.compile(rf"[{WORD_CHARS}]+(?:[{WORD_JOINERS}][{WORD_CHARS}]+)*")
WORD_CHAR_REGEX = regex.compile(rf"[{WORD_CHARS}]")


def is_word(token: str) -> bool:
    """True when the token carries at least one word character."""
    return bool(token) and WORD_CHAR_REGEX.search(token) is not None


def tokenize(text: str) -> List[str]:
    """Return the words of ``text`` in order, punctuation removed."""
    if not text:
        return []
    return [match.group() for match in WORD_REGEX.finditer(text)]


def tokenize_with_punctuation(text: str) -> List[str]:
    """Split ``text`` into words and punctuation chunks.

    Whitespace between two words is dropped. Punctuation keeps the whitespace
    that follows it, so ``"hello, world."`` becomes
    ``["hello", ", ", "world", "."]``.
    """
    if not text:
        return []

    tokens: List[str] = []
    position = 0
    for match in WORD_REGEX.finditer(text):
        _append_gap(tokens, text[position:match.start()])
        tokens.append(match.group())
        position = match.end()
    _append_gap(tokens, text[position:])
    return tokens


def _append_gap(tokens: List[str], gap: str) -> None:
    chunk = gap.lstrip()
    if chunk:
        tokens.append(chunk)


def occurrence_in_string(text: str, token_index: int, token: str) -> int:
    """Occurrence of ``token`` counting words of ``text`` up to ``token_index``."""
    words = tokenize(text)
    return sum(1 for word in words[: token_index + 1] if word == token)


def occurrences_in_string(text: str, token: str) -> int:
    return sum(1 for word in tokenize(text) if word == token)
