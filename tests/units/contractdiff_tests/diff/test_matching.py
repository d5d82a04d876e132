import operator

from contractdiff.diff.matching import match_identical


def test_match_identical_pairs_equal_elements():
    matching = match_identical(["a", "b", "c"], ["c", "a", "x"], operator.eq)

    assert matching.pairs == [(0, 1), (2, 0)]
    assert matching.unmatched1 == [1]
    assert matching.unmatched2 == [2]


def test_match_identical_is_one_to_one():
    matching = match_identical(["a", "a"], ["a"], operator.eq)

    assert matching.pairs == [(0, 0)]
    assert matching.unmatched1 == [1]
    assert matching.unmatched2 == []


def test_match_identical_empty_inputs():
    matching = match_identical([], ["a", "b"], operator.eq)

    assert matching.pairs == []
    assert matching.unmatched1 == []
    assert matching.unmatched2 == [0, 1]


def test_match_identical_uses_given_predicate():
    matching = match_identical(["A"], ["a"], lambda x, y: x.lower() == y.lower())
    assert matching.pairs == [(0, 0)]
