"""Verse objects, word objects and alignments."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Iterable, List, Union


@dataclass
class WordObject:
    """One word instance inside alignment or word bank data."""

    word: str
    occurrence: int = 1
    occurrences: int = 1
    attributes: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            'word': self.word,
            'occurrence': self.occurrence,
            'occurrences': self.occurrences,
        }
        data.update(self.attributes)
        return data


@dataclass
class Alignment:
    """Source words (top) and the target words (bottom) that translate them."""

    top_words: List[WordObject] = field(default_factory=list)
    bottom_words: List[WordObject] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'topWords': [word.to_dict() for word in self.top_words],
            'bottomWords': [word.to_dict() for word in self.bottom_words],
        }


@dataclass
class Word:
    text: str
    occurrence: int = 1
    occurrences: int = 1
    tag: str = "w"
    attributes: Dict[str, Any] = field(default_factory=dict)

    type: ClassVar[str] = "word"

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            'tag': self.tag,
            'type': self.type,
            'text': self.text,
            'occurrence': self.occurrence,
            'occurrences': self.occurrences,
        }
        data.update(self.attributes)
        return data


@dataclass
class Text:
    text: str

    type: ClassVar[str] = "text"

    def to_dict(self) -> Dict[str, Any]:
        return {'type': self.type, 'text': self.text}


@dataclass
class Milestone:
    """Span marker for a source word; the innermost one wraps the aligned words."""

    content: str
    occurrence: int = 1
    occurrences: int = 1
    tag: str = "zaln"
    children: List["VerseObject"] = field(default_factory=list)
    attributes: Dict[str, Any] = field(default_factory=dict)

    type: ClassVar[str] = "milestone"

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            'tag': self.tag,
            'type': self.type,
            'content': self.content,
            'occurrence': self.occurrence,
            'occurrences': self.occurrences,
        }
        data.update(self.attributes)
        data['children'] = [child.to_dict() for child in self.children]
        return data


@dataclass
class Footnote:
    content: str
    tag: str = "f"
    end_tag: str = "f*"

    type: ClassVar[str] = "footnote"

    def to_dict(self) -> Dict[str, Any]:
        return {
            'tag': self.tag,
            'type': self.type,
            'endTag': self.end_tag,
            'content': self.content,
        }


@dataclass
class Marker:
    """Standalone markup such as a paragraph break, passed through untouched."""

    tag: str
    kind: str = "paragraph"
    attributes: Dict[str, Any] = field(default_factory=dict)

    @property
    def type(self) -> str:
        return self.kind

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {'tag': self.tag, 'type': self.kind}
        data.update(self.attributes)
        return data


VerseObject = Union[Word, Text, Milestone, Footnote, Marker]
VERSE_OBJECT_TYPES = (Word, Text, Milestone, Footnote, Marker)


@dataclass
class UnmergeResult:
    alignment: List[Alignment] = field(default_factory=list)
    word_bank: List[WordObject] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'alignment': [item.to_dict() for item in self.alignment],
            'wordBank': [word.to_dict() for word in self.word_bank],
        }


def to_dicts(items: Iterable[Any]) -> List[Dict[str, Any]]:
    """Serialise verse objects, word objects or alignments to plain dicts."""
    return [item.to_dict() for item in items]
