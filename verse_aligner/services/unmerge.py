from __future__ import annotations

import dataclasses
import logging
from typing import Any, List, Optional, Sequence, Tuple

from verse_aligner.models import (
    Alignment,
    Milestone,
    Text,
    UnmergeResult,
    VerseObject,
    Word,
    WordObject,
)
from verse_aligner.schemas import parse_verse_objects, parse_word_object
from verse_aligner.verse_objects import (
    get_word_list_from_verse_objects,
    recompute_occurrences,
    same_milestone,
    tokenize_to_verse_objects,
    word_from_word_object,
    word_object_from_verse_object,
)

LOGGER = logging.getLogger(__name__)


def _same_occurrence(first: Any, second: Any) -> bool:
    """Compare occurrences that may arrive as ``1`` or ``"1"``."""
    if first == second:
        return True
    if not first or not second:
        return False
    try:
        return int(first) == int(second) != 0
    except (TypeError, ValueError):
        return False


def index_of_first_milestone(alignments: Sequence[Alignment], token: VerseObject) -> int:
    """Index of the alignment whose first top word is ``token``, or -1."""
    if not isinstance(token, Word):
        return -1
    for index, alignment in enumerate(alignments):
        if not alignment.top_words:
            continue
        first = alignment.top_words[0]
        if first.word == token.text and _same_occurrence(first.occurrence, token.occurrence):
            return index
    return -1


def index_of_milestone(alignments: Sequence[Alignment], token: VerseObject) -> int:
    """Index of the alignment having ``token`` at any top word position, or -1.

    Only the first top word with the same text is compared in each alignment.
    """
    if not isinstance(token, Word):
        return -1
    for index, alignment in enumerate(alignments):
        for top_word in alignment.top_words:
            if top_word.word == token.text:
                if _same_occurrence(top_word.occurrence, token.occurrence):
                    return index
                break
    return -1


def _is_word_object(item: Any) -> bool:
    return isinstance(item, WordObject) or (isinstance(item, dict) and "type" not in item)


def reference_tokens(reference_ordering: Any) -> Optional[List[VerseObject]]:
    """
    Normalise the ordering reference into words (and the other verse nodes for strings).

    Strings are tokenized; word objects are used as they are; verse objects have
    their words pulled out of milestones and occurrences recounted.
    """
    if reference_ordering is None:
        return None
    if isinstance(reference_ordering, str):
        return tokenize_to_verse_objects(reference_ordering)
    if isinstance(reference_ordering, dict) and 'verseObjects' in reference_ordering:
        reference_ordering = reference_ordering['verseObjects']

    items = list(reference_ordering)
    if all(_is_word_object(item) for item in items):
        return [word_from_word_object(parse_word_object(item)) for item in items]
    words = get_word_list_from_verse_objects(parse_verse_objects(items))
    return recompute_occurrences(words)


def order_alignments(
    reference: Optional[Sequence[VerseObject]],
    unordered: Sequence[Alignment],
) -> List[Alignment]:
    """Order alignments by where their first top word appears in ``reference``."""
    pool = list(unordered)
    if reference is None:
        return pool

    ordered: List[Alignment] = []
    for position, token in enumerate(reference):
        index = index_of_first_milestone(pool, token)
        if index < 0 and isinstance(token, Word) and position < len(reference) - 1:
            following = reference[position + 1]
            if isinstance(following, Text):
                # punctuation may have been split off a source word by the markup
                folded = dataclasses.replace(token, text=token.text + following.text)
                index = index_of_first_milestone(pool, folded)

        if index >= 0:
            ordered.append(pool.pop(index))
            continue
        if not isinstance(token, Word):
            continue

        # second word of a multi-word source span, or a split source word seen again
        if index_of_milestone(pool, token) >= 0 or index_of_milestone(ordered, token) >= 0:
            continue

        LOGGER.debug("Top word %r (occurrence %s) is unaligned", token.text, token.occurrence)
        ordered.append(Alignment(top_words=[word_object_from_verse_object(token)], bottom_words=[]))

    if pool:
        LOGGER.debug("Appending %d alignments not found in the reference", len(pool))
        ordered.extend(pool)
    return ordered


def _alignment_for_node(
    seeds: Sequence[Tuple[VerseObject, Alignment]],
    verse_object: VerseObject,
) -> Optional[Alignment]:
    for seed, alignment in seeds:
        if same_milestone(seed, verse_object):
            return alignment
    return None


def absorb_verse_object(verse_object: VerseObject, alignment: Alignment) -> Alignment:
    """Add the top and bottom words found in ``verse_object`` to ``alignment``."""
    if isinstance(verse_object, Milestone) and verse_object.children:
        top_word = word_object_from_verse_object(verse_object)
        duplicate = any(
            existing.word == top_word.word and existing.occurrence == top_word.occurrence
            for existing in alignment.top_words
        )
        if not duplicate:
            alignment.top_words.append(top_word)
        for child in verse_object.children:
            absorb_verse_object(child, alignment)
    elif isinstance(verse_object, Word):
        alignment.bottom_words.append(word_object_from_verse_object(verse_object))
    return alignment


def unmerge(verse_objects: Any, reference_ordering: Any = None) -> UnmergeResult:
    """
    Split a verse object tree back into alignments and a word bank.

    Args:
        verse_objects: Verse objects (or ``{"verseObjects": [...]}``) as dicts or models
        reference_ordering: Source verse string, word objects or verse objects used
            to order the alignments; ``None`` keeps tree order

    Returns:
        UnmergeResult with ordered alignments and the unaligned target words
    """
    nodes = parse_verse_objects(verse_objects)
    reference = reference_tokens(reference_ordering)
    LOGGER.debug("Unmerging %d verse objects", len(nodes))

    seeds: List[Tuple[VerseObject, Alignment]] = []
    groups: List[Alignment] = []
    for node in nodes:
        alignment = _alignment_for_node(seeds, node)
        if alignment is None:
            alignment = Alignment()
            groups.append(alignment)
            seeds.append((node, alignment))
        absorb_verse_object(node, alignment)

    word_bank: List[WordObject] = []
    unordered: List[Alignment] = []
    for alignment in groups:
        if alignment.top_words:
            unordered.append(alignment)
        else:
            word_bank.extend(alignment.bottom_words)

    return UnmergeResult(alignment=order_alignments(reference, unordered), word_bank=word_bank)
