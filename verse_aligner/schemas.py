"""Validation of caller supplied JSON into fresh model objects."""

from __future__ import annotations

import copy
from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from .errors import StructuralError
from .models import (
    VERSE_OBJECT_TYPES,
    Alignment,
    Footnote,
    Marker,
    Milestone,
    Text,
    VerseObject,
    Word,
    WordObject,
)

PayloadT = TypeVar("PayloadT", bound=BaseModel)


def _check_occurrence(occurrence: int, occurrences: int, text: str) -> None:
    if occurrence > occurrences:
        raise ValueError(f"occurrence {occurrence} exceeds occurrences {occurrences} for {text!r}")


class WordObjectPayload(BaseModel):
    model_config = ConfigDict(extra="allow")

    word: str
    occurrence: int = Field(ge=1)
    occurrences: int = Field(ge=1)

    @model_validator(mode="after")
    def _occurrence_within_occurrences(self) -> "WordObjectPayload":
        _check_occurrence(self.occurrence, self.occurrences, self.word)
        return self


class AlignmentPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    top_words: List[WordObjectPayload] = Field(alias="topWords")
    bottom_words: List[WordObjectPayload] = Field(alias="bottomWords")


class WordNodePayload(BaseModel):
    model_config = ConfigDict(extra="allow")

    tag: str = "w"
    text: str
    occurrence: int = Field(default=1, ge=1)
    occurrences: int = Field(default=1, ge=1)

    @model_validator(mode="after")
    def _check_shape(self) -> "WordNodePayload":
        _check_occurrence(self.occurrence, self.occurrences, self.text)
        if self.model_extra and "children" in self.model_extra:
            raise ValueError(f"word {self.text!r} cannot carry children")
        return self


class TextNodePayload(BaseModel):
    text: str


class MilestoneNodePayload(BaseModel):
    model_config = ConfigDict(extra="allow")

    tag: str = "zaln"
    content: str
    occurrence: int = Field(default=1, ge=1)
    occurrences: int = Field(default=1, ge=1)
    children: List[Dict[str, Any]]

    @model_validator(mode="after")
    def _occurrence_within_occurrences(self) -> "MilestoneNodePayload":
        _check_occurrence(self.occurrence, self.occurrences, self.content)
        return self


class FootnoteNodePayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    tag: str = "f"
    end_tag: str = Field(default="f*", alias="endTag")
    content: str = ""


class MarkerNodePayload(BaseModel):
    model_config = ConfigDict(extra="allow")

    tag: str


def _validate(model: Type[PayloadT], data: Any, what: str) -> PayloadT:
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise StructuralError(
            f"Invalid {what}: {exc.error_count()} validation error(s)",
            errors=exc.errors(include_url=False),
        ) from exc


def _extras(payload: BaseModel) -> Dict[str, Any]:
    return copy.deepcopy(dict(payload.model_extra or {}))


def _word_object_from_payload(payload: WordObjectPayload) -> WordObject:
    return WordObject(
        word=payload.word,
        occurrence=payload.occurrence,
        occurrences=payload.occurrences,
        attributes=_extras(payload),
    )


def _require_list(items: Any, what: str) -> List[Any]:
    if not isinstance(items, (list, tuple)):
        raise StructuralError(f"Expected a list of {what}, got {type(items).__name__}")
    return list(items)


def parse_word_object(data: Any) -> WordObject:
    if isinstance(data, WordObject):
        return copy.deepcopy(data)
    return _word_object_from_payload(_validate(WordObjectPayload, data, "word object"))


def parse_word_objects(items: Any) -> List[WordObject]:
    return [parse_word_object(item) for item in _require_list(items, "word objects")]


def parse_alignment(data: Any) -> Alignment:
    if isinstance(data, Alignment):
        return copy.deepcopy(data)
    payload = _validate(AlignmentPayload, data, "alignment")
    return Alignment(
        top_words=[_word_object_from_payload(word) for word in payload.top_words],
        bottom_words=[_word_object_from_payload(word) for word in payload.bottom_words],
    )


def parse_alignments(items: Any) -> List[Alignment]:
    return [parse_alignment(item) for item in _require_list(items, "alignments")]


def parse_verse_object(data: Any) -> VerseObject:
    """Build a verse object from its JSON shape, dispatching on ``type``."""
    if isinstance(data, VERSE_OBJECT_TYPES):
        return copy.deepcopy(data)
    if not isinstance(data, dict):
        raise StructuralError(f"Expected a verse object mapping, got {type(data).__name__}")

    node_type: Optional[str] = data.get('type')
    body = {key: value for key, value in data.items() if key != 'type'}

    if node_type == 'word':
        word = _validate(WordNodePayload, body, "word verse object")
        return Word(
            text=word.text,
            occurrence=word.occurrence,
            occurrences=word.occurrences,
            tag=word.tag,
            attributes=_extras(word),
        )
    if node_type == 'text':
        return Text(text=_validate(TextNodePayload, body, "text verse object").text)
    if node_type == 'milestone':
        milestone = _validate(MilestoneNodePayload, body, "milestone verse object")
        return Milestone(
            content=milestone.content,
            occurrence=milestone.occurrence,
            occurrences=milestone.occurrences,
            tag=milestone.tag,
            children=[parse_verse_object(child) for child in milestone.children],
            attributes=_extras(milestone),
        )
    if node_type == 'footnote':
        footnote = _validate(FootnoteNodePayload, body, "footnote verse object")
        return Footnote(content=footnote.content, tag=footnote.tag, end_tag=footnote.end_tag)
    if isinstance(node_type, str) and node_type:
        marker = _validate(MarkerNodePayload, body, f"{node_type} verse object")
        return Marker(tag=marker.tag, kind=node_type, attributes=_extras(marker))

    raise StructuralError(f"Verse object without a type: {data!r}")


def parse_verse_objects(items: Any) -> List[VerseObject]:
    """Accepts a list of verse objects or a ``{"verseObjects": [...]}`` wrapper."""
    if isinstance(items, dict) and 'verseObjects' in items:
        items = items['verseObjects']
    return [parse_verse_object(item) for item in _require_list(items, "verse objects")]
