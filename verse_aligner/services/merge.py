from __future__ import annotations

import copy
import logging
from typing import Any, Dict, List, Sequence

from verse_aligner.errors import CoverageError, StructuralError, WordLookupError
from verse_aligner.models import Alignment, VerseObject, Word, WordObject
from verse_aligner.schemas import parse_alignments, parse_word_objects
from verse_aligner.utils.arrays import delete_indices, group_consecutive
from verse_aligner.verse_objects import (
    index_of_verse_object,
    innermost_milestone,
    milestone_from_word_object,
    nest_milestones,
    tokenize_to_verse_objects,
    word_from_word_object,
)

LOGGER = logging.getLogger(__name__)


def _matches(word: Word, word_object: WordObject) -> bool:
    return (
        word_object.word == word.text
        and word_object.occurrence == word.occurrence
        and word_object.occurrences == word.occurrences
    )


def find_uncovered_words(
    alignments: Sequence[Alignment],
    word_bank: Sequence[WordObject],
    verse_objects: Sequence[VerseObject],
) -> List[Word]:
    """Words of the verse that are neither in the word bank nor in any alignment."""
    uncovered: List[Word] = []
    for verse_object in verse_objects:
        if not isinstance(verse_object, Word):
            continue
        in_word_bank = any(_matches(verse_object, word) for word in word_bank)
        in_alignments = any(
            _matches(verse_object, word)
            for alignment in alignments
            for word in alignment.bottom_words
        )
        if not in_word_bank and not in_alignments:
            uncovered.append(verse_object)
    return uncovered


class _Claims:
    """Tracks which reference positions were already given a word."""

    def __init__(self) -> None:
        self._owners: Dict[int, str] = {}

    def claim(self, index: int, word: Word, owner: str) -> None:
        previous = self._owners.get(index)
        if previous is not None:
            raise StructuralError(
                f"Word {word.text!r} (occurrence {word.occurrence}) is claimed by both "
                f"{previous} and {owner}"
            )
        self._owners[index] = owner


def merge(alignments: Any, word_bank: Any, verse_string: str) -> List[VerseObject]:
    """
    Build the ordered verse object tree for a verse from its alignment data.

    Args:
        alignments: Alignments ``{topWords, bottomWords}`` as dicts or models
        word_bank: Target words not assigned to any alignment
        verse_string: Target-language verse text giving order, punctuation and footnotes

    Returns:
        Verse objects where aligned words are wrapped in nested milestones

    Raises:
        CoverageError: a word of the verse is not in the alignment data
        WordLookupError: a word of the alignment data is not in the verse
        StructuralError: malformed alignment data
    """
    alignments = parse_alignments(alignments)
    word_bank = parse_word_objects(word_bank)
    LOGGER.debug(
        "Merging %d alignments and %d word bank entries", len(alignments), len(word_bank)
    )

    reference = tokenize_to_verse_objects(verse_string)
    output: List[VerseObject] = copy.deepcopy(reference)

    uncovered = find_uncovered_words(alignments, word_bank, reference)
    if uncovered:
        LOGGER.debug("Verse words missing from alignment data: %s", uncovered)
        raise CoverageError([word.text for word in uncovered])

    claims = _Claims()
    for bottom_word in word_bank:
        verse_object = word_from_word_object(bottom_word)
        index = index_of_verse_object(reference, verse_object)
        if index < 0:
            LOGGER.debug("Word bank entry %r not found in verse text", bottom_word.word)
            raise WordLookupError(bottom_word.word, source="word_bank")
        claims.claim(index, verse_object, "the word bank")
        output[index] = verse_object

    indices_to_delete: List[int] = []
    for position, alignment in enumerate(alignments):
        owner = f"alignment {position}"
        replacements: Dict[int, Word] = {}
        for bottom_word in alignment.bottom_words:
            verse_object = word_from_word_object(bottom_word)
            index = index_of_verse_object(reference, verse_object)
            if index < 0:
                LOGGER.debug("Alignment %d: %r not found in verse text", position, bottom_word.word)
                raise WordLookupError(bottom_word.word, source="alignment")
            claims.claim(index, verse_object, owner)
            replacements[index] = verse_object

        if not replacements:
            continue
        if not alignment.top_words:
            raise StructuralError(f"Alignment {position} has bottom words but no top words")

        milestones = [milestone_from_word_object(word) for word in alignment.top_words]
        # an aligned phrase renders once per contiguous run of its words
        for run in group_consecutive(replacements):
            root = nest_milestones(milestones)
            innermost_milestone(root).children = [replacements[index] for index in run]
            output[run[0]] = root
            indices_to_delete.extend(run[1:])

    return delete_indices(output, indices_to_delete)
