"""Occurrence-tagged verse objects and conversions between node shapes."""

from __future__ import annotations

import copy
from typing import Any, Iterable, List, Optional, Sequence, Union

from .config import get_settings
from .errors import StructuralError
from .models import (
    Footnote,
    Marker,
    Milestone,
    Text,
    VerseObject,
    Word,
    WordObject,
)
from .parsing import markup, tokenizer

WordLike = Union[Word, WordObject]


def get_word_text(item: Any) -> Optional[str]:
    """Text of a word verse object or word object, ``None`` for anything else."""
    if isinstance(item, Word):
        return item.text
    if isinstance(item, WordObject):
        return item.word
    return None


def get_occurrence(words: Union[str, Sequence[Any]], index: int, text: str) -> int:
    """Occurrence of ``text`` counting entries of ``words`` up to ``index``."""
    if isinstance(words, str):
        return tokenizer.occurrence_in_string(words, index, text)
    return sum(1 for item in words[: index + 1] if get_word_text(item) == text)


def get_occurrences(words: Union[str, Sequence[Any]], text: str) -> int:
    if isinstance(words, str):
        return tokenizer.occurrences_in_string(words, text)
    return sum(1 for item in words if get_word_text(item) == text)


def tokenize_to_verse_objects(text: str) -> List[VerseObject]:
    """
    Turn verse text into ordered verse objects.

    Words get occurrence/occurrences counted over the text of all non-footnote
    segments, punctuation becomes ``Text`` nodes and footnotes stay opaque.

    Args:
        text: Verse text, possibly with inline markers

    Returns:
        List of Word, Text, Footnote and Marker objects in verse order
    """
    if not text:
        return []

    settings = get_settings()
    segments = markup.parse_segments(text, settings.note_markers)
    joined_text = markup.segments_text(segments)

    verse_objects: List[VerseObject] = []
    word_index = 0
    for segment in segments:
        segment_type = segment['type']
        if segment_type == 'text':
            for token in tokenizer.tokenize_with_punctuation(segment['text']):
                if not tokenizer.is_word(token):
                    verse_objects.append(Text(text=token))
                    continue
                occurrences = tokenizer.occurrences_in_string(joined_text, token)
                occurrence = tokenizer.occurrence_in_string(joined_text, word_index, token)
                # guards against drift between segment and joined-text tokenization
                occurrence = min(occurrence, occurrences)
                word_index += 1
                verse_objects.append(
                    Word(
                        text=token,
                        occurrence=occurrence,
                        occurrences=occurrences,
                        tag=settings.word_tag,
                    )
                )
        elif segment_type == 'footnote':
            verse_objects.append(
                Footnote(
                    content=segment.get('content', ''),
                    tag=segment.get('tag', 'f'),
                    end_tag=segment.get('endTag', 'f*'),
                )
            )
        else:
            verse_objects.append(Marker(tag=segment['tag'], kind=segment_type))
    return verse_objects


def recompute_occurrences(verse_objects: Iterable[VerseObject]) -> List[VerseObject]:
    """Copy ``verse_objects`` and recount occurrences of top-level words by position."""
    result = [copy.deepcopy(item) for item in verse_objects]
    for index, item in enumerate(result):
        if isinstance(item, Word):
            item.occurrence = get_occurrence(result, index, item.text)
            item.occurrences = get_occurrences(result, item.text)
    return result


def word_from_word_object(word_object: WordObject) -> Word:
    return Word(
        text=word_object.word,
        occurrence=word_object.occurrence,
        occurrences=word_object.occurrences,
        tag=get_settings().word_tag,
        attributes=copy.deepcopy(word_object.attributes),
    )


def milestone_from_word_object(word_object: WordObject) -> Milestone:
    """Milestone for a top word; fields that only matter to the editor are dropped."""
    settings = get_settings()
    dropped = set(settings.milestone_drop_fields)
    attributes = {
        key: copy.deepcopy(value)
        for key, value in word_object.attributes.items()
        if key not in dropped
    }
    return Milestone(
        content=word_object.word,
        occurrence=word_object.occurrence,
        occurrences=word_object.occurrences,
        tag=settings.milestone_tag,
        children=[],
        attributes=attributes,
    )


def word_object_from_verse_object(verse_object: VerseObject) -> WordObject:
    if isinstance(verse_object, Word):
        word = verse_object.text
    elif isinstance(verse_object, Milestone):
        word = verse_object.content
    else:
        raise StructuralError(
            f"Cannot build a word object from a {verse_object.type} verse object"
        )
    return WordObject(
        word=word,
        occurrence=verse_object.occurrence,
        occurrences=verse_object.occurrences,
        attributes=copy.deepcopy(verse_object.attributes),
    )


def index_of_verse_object(verse_objects: Sequence[VerseObject], target: VerseObject) -> int:
    """Index of the first word with the same tag, text, occurrence and occurrences, or -1."""
    for index, item in enumerate(verse_objects):
        if isinstance(target, Word):
            if (
                isinstance(item, Word)
                and item.tag == target.tag
                and item.text == target.text
                and item.occurrence == target.occurrence
                and item.occurrences == target.occurrences
            ):
                return index
        elif item == target:
            return index
    return -1


def same_milestone(first: VerseObject, second: VerseObject) -> bool:
    """True when both nodes mark the same source word, even if not adjacent."""
    return (
        isinstance(first, Milestone)
        and isinstance(second, Milestone)
        and first.content == second.content
        and first.occurrence == second.occurrence
    )


def nest_milestones(milestones: Sequence[Milestone]) -> Milestone:
    """
    Nest copies of ``milestones`` so the first is the root and each next one is
    the only child of the previous. The innermost keeps its own children.
    """
    if not milestones:
        raise StructuralError("Cannot nest an empty list of milestones")

    copies = [copy.deepcopy(item) for item in milestones]
    root = copies[-1]
    for milestone in reversed(copies[:-1]):
        milestone.children = [root]
        root = milestone
    return root


def innermost_milestone(root: Milestone) -> Milestone:
    node = root
    while len(node.children) == 1 and isinstance(node.children[0], Milestone):
        node = node.children[0]
    return node


def extract_words_from_verse_object(verse_object: Any) -> List[WordLike]:
    if isinstance(verse_object, (Word, WordObject)):
        return [verse_object]
    if isinstance(verse_object, Milestone):
        words: List[WordLike] = []
        for child in verse_object.children:
            words.extend(extract_words_from_verse_object(child))
        return words
    return []


def get_word_list_from_verse_objects(verse_objects: Iterable[Any]) -> List[WordLike]:
    words: List[WordLike] = []
    for verse_object in verse_objects:
        words.extend(extract_words_from_verse_object(verse_object))
    return words


def get_word_list(verse_objects: Union[str, Iterable[Any], None]) -> List[WordLike]:
    """Words of a verse string or verse object list, looking inside milestones."""
    if verse_objects is None:
        return []
    if isinstance(verse_objects, str):
        verse_objects = tokenize_to_verse_objects(verse_objects)
    return get_word_list_from_verse_objects(verse_objects)


def get_words_from_verse_objects(verse_objects: Iterable[VerseObject]) -> List[VerseObject]:
    """Flatten milestones into their leaves, keeping text and footnotes in place."""
    flattened: List[VerseObject] = []
    for verse_object in verse_objects:
        if isinstance(verse_object, Milestone):
            flattened.extend(get_words_from_verse_objects(verse_object.children))
        else:
            flattened.append(verse_object)
    return flattened


def _display_text(verse_object: Any) -> Optional[str]:
    if isinstance(verse_object, (Word, Text)):
        return verse_object.text
    return None


def merge_verse_data(
    verse_objects: Iterable[VerseObject],
    types: Optional[Iterable[str]] = None,
) -> str:
    """Join the words (and text, unless filtered out by ``types``) into a display string."""
    allowed = set(types) if types is not None else None
    pieces: List[str] = []
    for part in verse_objects:
        words = extract_words_from_verse_object(part) if isinstance(part, Milestone) else [part]
        for word in words:
            text = _display_text(word)
            if not text:
                continue
            if allowed is None or word.type in allowed:
                pieces.append(text)

    verse_text = ""
    for piece in pieces:
        if verse_text and not verse_text.endswith('\n'):
            verse_text += ' '
        verse_text += piece
    return verse_text


def combine_verse_array(items: Iterable[Any]) -> str:
    return ' '.join(get_word_text(item) or '' for item in items)


def populate_occurrences_in_word_objects(words: Union[str, Iterable[Any]]) -> List[WordObject]:
    """Word objects for every word in ``words`` with occurrences counted by position."""
    word_list = get_word_list(words)
    populated: List[WordObject] = []
    for index, item in enumerate(word_list):
        word_object = (
            copy.deepcopy(item)
            if isinstance(item, WordObject)
            else word_object_from_verse_object(item)
        )
        word_object.occurrence = get_occurrence(word_list, index, word_object.word)
        word_object.occurrences = get_occurrences(word_list, word_object.word)
        populated.append(word_object)
    return populated


def word_objects_from_string(text: str) -> List[WordObject]:
    return [
        WordObject(
            word=word,
            occurrence=tokenizer.occurrence_in_string(text, index, word),
            occurrences=tokenizer.occurrences_in_string(text, word),
        )
        for index, word in enumerate(tokenizer.tokenize(text))
    ]


def sort_word_objects_by_string(
    word_objects: Iterable[WordObject],
    reference: Union[str, Iterable[Any]],
) -> List[WordObject]:
    """
    Order word objects by where their identity appears in ``reference``.

    Entries that cannot be found sort first, in their given order.
    """
    if isinstance(reference, str):
        ordered = word_objects_from_string(reference)
    else:
        ordered = populate_occurrences_in_word_objects(reference)

    def _position(word_object: WordObject) -> int:
        for index, candidate in enumerate(ordered):
            if (
                candidate.word == word_object.word
                and candidate.occurrence == word_object.occurrence
                and candidate.occurrences == word_object.occurrences
            ):
                return index
        return -1

    copies = [copy.deepcopy(word_object) for word_object in word_objects]
    return sorted(copies, key=_position)
