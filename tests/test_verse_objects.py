import pytest

from verse_aligner.errors import StructuralError
from verse_aligner.models import Footnote, Milestone, Text, Word, WordObject, to_dicts
from verse_aligner.verse_objects import (
    get_word_list,
    get_words_from_verse_objects,
    index_of_verse_object,
    innermost_milestone,
    merge_verse_data,
    milestone_from_word_object,
    nest_milestones,
    populate_occurrences_in_word_objects,
    recompute_occurrences,
    same_milestone,
    sort_word_objects_by_string,
    tokenize_to_verse_objects,
    word_from_word_object,
    word_object_from_verse_object,
    word_objects_from_string,
)


def _word(text, occurrence=1, occurrences=1):
    return {'tag': 'w', 'type': 'word', 'text': text, 'occurrence': occurrence, 'occurrences': occurrences}


def test_tokenize_handles_words_without_punctuation():
    assert to_dicts(tokenize_to_verse_objects("hello world")) == [_word("hello"), _word("world")]


def test_tokenize_tags_repeated_words_with_occurrences():
    result = to_dicts(tokenize_to_verse_objects("son of David, son of Abraham."))
    assert result == [
        _word("son", 1, 2),
        _word("of", 1, 2),
        _word("David"),
        {'type': 'text', 'text': ', '},
        _word("son", 2, 2),
        _word("of", 2, 2),
        _word("Abraham"),
        {'type': 'text', 'text': '.'},
    ]


def test_tokenize_keeps_footnotes_as_their_own_object():
    text = (
        "son of David, son of Abraham. \\f Footnotes shouldn't be rendered as text "
        "but as content in their own object.\\f*"
    )
    result = to_dicts(tokenize_to_verse_objects(text))
    assert result[-2] == {'type': 'text', 'text': '. '}
    assert result[-1] == {
        'tag': 'f',
        'type': 'footnote',
        'endTag': 'f*',
        'content': "Footnotes shouldn't be rendered as text but as content in their own object.",
    }
    words = [item['text'] for item in result if item['type'] == 'word']
    assert words == ["son", "of", "David", "son", "of", "Abraham"]


def test_tokenize_counts_words_across_footnotes():
    result = tokenize_to_verse_objects("the word \\f the note\\f* the end")
    words = [(item.text, item.occurrence, item.occurrences) for item in result if isinstance(item, Word)]
    assert words == [("the", 1, 2), ("word", 1, 1), ("the", 2, 2), ("end", 1, 1)]


def test_tokenize_empty_text():
    assert tokenize_to_verse_objects("") == []


def test_recompute_occurrences_is_idempotent_and_copies():
    stale = [Word("a", 5, 5), Text(" "), Word("b", 2, 3), Word("a", 9, 9)]
    once = recompute_occurrences(stale)
    twice = recompute_occurrences(once)
    assert [(w.occurrence, w.occurrences) for w in once if isinstance(w, Word)] == [(1, 2), (1, 1), (2, 2)]
    assert once == twice
    assert stale[0].occurrence == 5


def test_recompute_occurrences_ignores_milestone_children():
    inner = Word("a", 7, 7)
    milestone = Milestone("x", children=[inner])
    result = recompute_occurrences([Word("a"), milestone, Word("a")])
    assert (result[0].occurrence, result[0].occurrences) == (1, 2)
    assert (result[2].occurrence, result[2].occurrences) == (2, 2)
    assert result[1].children[0].occurrence == 7


def test_nest_milestones_nests_copies_in_order():
    m1 = Milestone("first")
    m2 = Milestone("second")
    m3 = Milestone("third", children=[Word("leaf")])

    root = nest_milestones([m1, m2, m3])

    assert root.content == "first"
    assert [child.content for child in root.children] == ["second"]
    assert [child.content for child in root.children[0].children] == ["third"]
    assert root.children[0].children[0].children == [Word("leaf")]
    assert innermost_milestone(root).content == "third"
    assert m1.children == []
    assert m2.children == []


def test_nest_milestones_requires_input():
    with pytest.raises(StructuralError):
        nest_milestones([])


def test_milestone_from_word_object_drops_editor_fields():
    top_word = WordObject("Βίβλος", 1, 1, {"strong": "G09760", "tw": "rc://kt/book"})
    assert milestone_from_word_object(top_word).to_dict() == {
        'tag': 'zaln',
        'type': 'milestone',
        'content': 'Βίβλος',
        'occurrence': 1,
        'occurrences': 1,
        'strong': 'G09760',
        'children': [],
    }
    assert top_word.attributes["tw"] == "rc://kt/book"


def test_word_object_conversions_round_trip():
    bottom_word = WordObject("book", 1, 2)
    word = word_from_word_object(bottom_word)
    assert word.to_dict() == _word("book", 1, 2)
    assert word_object_from_verse_object(word) == bottom_word

    milestone = Milestone("Βίβλος", 1, 1, children=[word], attributes={"lemma": "βίβλος"})
    assert word_object_from_verse_object(milestone).to_dict() == {
        'word': 'Βίβλος',
        'occurrence': 1,
        'occurrences': 1,
        'lemma': 'βίβλος',
    }


def test_word_object_from_text_is_rejected():
    with pytest.raises(StructuralError):
        word_object_from_verse_object(Text(", "))


def test_index_of_verse_object_uses_text_and_occurrences():
    reference = tokenize_to_verse_objects("son of David, son of Abraham.")
    assert index_of_verse_object(reference, Word("son", 2, 2)) == 4
    assert index_of_verse_object(reference, Word("son", 3, 3)) == -1
    assert index_of_verse_object(reference, Word("son", 1, 1)) == -1
    assert index_of_verse_object(reference, Text(".")) == 7


def test_same_milestone():
    assert same_milestone(Milestone("λόγος", 1, 2), Milestone("λόγος", 1, 2, children=[Word("word")]))
    assert not same_milestone(Milestone("λόγος", 1, 2), Milestone("λόγος", 2, 2))
    assert not same_milestone(Word("λόγος"), Milestone("λόγος"))


def test_word_lists_look_inside_milestones():
    tree = [
        Milestone("Τίτῳ", children=[Word("to"), Word("Titus")]),
        Text(", "),
        Milestone("γνησίῳ", children=[Milestone("τέκνῳ", children=[Word("true"), Word("son")])]),
        Footnote("note"),
    ]
    assert [word.text for word in get_word_list(tree)] == ["to", "Titus", "true", "son"]
    assert get_words_from_verse_objects(tree) == [
        Word("to"), Word("Titus"), Text(", "), Word("true"), Word("son"), Footnote("note"),
    ]
    assert merge_verse_data(tree) == "to Titus ,  true son"
    assert merge_verse_data(tree, types=["word"]) == "to Titus true son"


def test_word_objects_from_string():
    result = word_objects_from_string("a b a")
    assert [word.to_dict() for word in result] == [
        {'word': 'a', 'occurrence': 1, 'occurrences': 2},
        {'word': 'b', 'occurrence': 1, 'occurrences': 1},
        {'word': 'a', 'occurrence': 2, 'occurrences': 2},
    ]


def test_populate_occurrences_in_word_objects():
    result = populate_occurrences_in_word_objects([WordObject("x", 9, 9), Word("y"), WordObject("x", 9, 9)])
    assert [(word.word, word.occurrence, word.occurrences) for word in result] == [
        ("x", 1, 2), ("y", 1, 1), ("x", 2, 2),
    ]


def test_sort_word_objects_by_string():
    text = "qwerty asdf zxcv uiop jkl; bnm, qwerty asdf zxcv jkl; bnm,"
    word_objects = [
        WordObject("zxcv", 2, 2),
        WordObject("qwerty", 2, 2),
        WordObject("qwerty", 1, 2),
        WordObject("zxcv", 1, 2),
    ]
    result = sort_word_objects_by_string(word_objects, text)
    assert [(word.word, word.occurrence) for word in result] == [
        ("qwerty", 1), ("zxcv", 1), ("qwerty", 2), ("zxcv", 2),
    ]


def test_sort_word_objects_by_word_object_list_keeps_attributes():
    reference = [
        WordObject("qwerty", 1, 2),
        WordObject("zxcv", 1, 2),
        WordObject("qwerty", 2, 2),
        WordObject("zxcv", 2, 2),
    ]
    word_objects = [
        WordObject("zxcv", 2, 2, {"wordObjectData": 1}),
        WordObject("qwerty", 1, 2, {"wordObjectData": 1}),
    ]
    result = sort_word_objects_by_string(word_objects, reference)
    assert [word.to_dict() for word in result] == [
        {'word': 'qwerty', 'occurrence': 1, 'occurrences': 2, 'wordObjectData': 1},
        {'word': 'zxcv', 'occurrence': 2, 'occurrences': 2, 'wordObjectData': 1},
    ]
