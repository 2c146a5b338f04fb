import pytest

from verse_aligner.errors import StructuralError
from verse_aligner.models import Footnote, Marker, Milestone, Text, Word, WordObject
from verse_aligner.schemas import (
    parse_alignment,
    parse_verse_object,
    parse_verse_objects,
    parse_word_object,
    parse_word_objects,
)


def test_word_object_coerces_string_occurrences():
    word = parse_word_object({'word': 'λόγος', 'occurrence': '1', 'occurrences': '2'})
    assert (word.occurrence, word.occurrences) == (1, 2)


def test_word_object_keeps_extra_fields_as_attributes():
    word = parse_word_object({'word': 'λόγος', 'occurrence': 1, 'occurrences': 1, 'strong': 'G30560'})
    assert word.attributes == {'strong': 'G30560'}
    assert word.to_dict()['strong'] == 'G30560'


def test_word_object_occurrence_above_occurrences_is_rejected():
    with pytest.raises(StructuralError) as excinfo:
        parse_word_object({'word': 'λόγος', 'occurrence': 3, 'occurrences': 2})
    assert excinfo.value.errors
    assert excinfo.value.to_dict()['type'] == 'structural_error'


def test_word_object_requires_occurrences():
    with pytest.raises(StructuralError):
        parse_word_object({'word': 'λόγος', 'occurrence': 1})


def test_word_object_instances_are_copied():
    original = WordObject('λόγος', 1, 1, {'strong': 'G30560'})
    parsed = parse_word_object(original)
    parsed.attributes['strong'] = 'changed'
    assert original.attributes['strong'] == 'G30560'


def test_word_objects_must_be_a_list():
    with pytest.raises(StructuralError):
        parse_word_objects({'word': 'λόγος', 'occurrence': 1, 'occurrences': 1})


def test_alignment_accepts_json_keys():
    alignment = parse_alignment({
        'topWords': [{'word': 'λόγος', 'occurrence': 1, 'occurrences': 1}],
        'bottomWords': [{'word': 'word', 'occurrence': 1, 'occurrences': 1}],
    })
    assert alignment.top_words == [WordObject('λόγος')]
    assert alignment.bottom_words == [WordObject('word')]


def test_verse_objects_dispatch_on_type():
    result = parse_verse_objects({'verseObjects': [
        {'type': 'word', 'text': 'In'},
        {'type': 'text', 'text': ' '},
        {'type': 'milestone', 'tag': 'zaln', 'content': 'Ἐν', 'occurrence': 1, 'occurrences': 1,
         'strong': 'G17220', 'children': [{'type': 'word', 'tag': 'w', 'text': 'the'}]},
        {'type': 'footnote', 'tag': 'f', 'endTag': 'f*', 'content': 'note'},
        {'type': 'paragraph', 'tag': 'p'},
    ]})
    assert result == [
        Word('In'),
        Text(' '),
        Milestone('Ἐν', children=[Word('the')], attributes={'strong': 'G17220'}),
        Footnote('note'),
        Marker('p'),
    ]


def test_unknown_type_becomes_marker_and_round_trips():
    data = {'type': 'section', 'tag': 's1', 'content': 'Heading'}
    marker = parse_verse_object(data)
    assert marker.type == 'section'
    assert marker.to_dict() == {'tag': 's1', 'type': 'section', 'content': 'Heading'}


def test_word_with_children_is_rejected():
    with pytest.raises(StructuralError):
        parse_verse_object({'type': 'word', 'text': 'In', 'children': []})


def test_non_mapping_verse_object_is_rejected():
    with pytest.raises(StructuralError):
        parse_verse_object('In')


def test_verse_objects_must_be_a_list():
    with pytest.raises(StructuralError):
        parse_verse_objects('In the beginning')


def test_tree_nodes_with_occurrence_above_occurrences_are_rejected():
    with pytest.raises(StructuralError):
        parse_verse_object({'type': 'word', 'text': 'In', 'occurrence': 2, 'occurrences': 1})
    with pytest.raises(StructuralError):
        parse_verse_object({'type': 'milestone', 'content': 'Ἐν', 'occurrence': 3, 'occurrences': 2, 'children': []})
