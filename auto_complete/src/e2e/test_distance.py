# src/e2e/test_distance.py
import pytest

from fuzzycomplete.distance import (
    EditDistance,
    insert_wildcard,
    lcs_length,
    levenshtein,
    wildcard_distance,
)


def test_plain_edit_distances():
    lev = EditDistance()
    assert lev.distance("kitten", "sitting") == 3
    assert lev.distance("", "abc") == 3
    assert lev.distance("abc", "") == 3
    assert lev.distance("same", "same") == 0


def test_phonetic_neighbours_substitute_for_free():
    lev = EditDistance()
    assert lev.distance("bald", "pald") == 0
    assert lev.distance("schmitt", "schmidt") == 0
    assert lev.distance("m", "n") == 0


def test_neighbour_lookup_is_keyed_by_first_string():
    lev = EditDistance()
    assert lev.distance("k", "q") == 0
    assert lev.distance("q", "k") == 1


def test_scratch_row_grows_with_longer_inputs():
    lev = EditDistance(capacity=2)
    assert lev.distance("aaaaaaaaaa", "aaaaaaaaaa") == 0
    assert lev.distance("abcdefghijklmnop", "") == 16
    # shorter input after a long one must not read stale cells
    assert lev.distance("ab", "ax") == 1


def test_unit_cost_levenshtein_ignores_phonetics():
    assert levenshtein("kitten", "sitting") == 3
    assert levenshtein("bald", "pald") == 1


@pytest.mark.parametrize("query,expected", [
    ("banana", "ban*na"),
    ("abcd", "ab*d"),
    ("abc", "abc"),
    ("", ""),
])
def test_insert_wildcard_marks_the_middle(query, expected):
    assert insert_wildcard(query) == expected


def test_wildcard_distance_strips_markers():
    assert wildcard_distance("ba*ana", "banana") == 1
    assert wildcard_distance("**", "") == 0
    assert wildcard_distance("ban*na", "banana") == 1


def test_lcs_length():
    assert lcs_length("bananna", "banana") == 6
    assert lcs_length("acb", "abc") == 2
    assert lcs_length("abc", "") == 0
    assert lcs_length("cdn", "content delivery network") == 3
