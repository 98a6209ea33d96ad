# tests/test_shuffle.py

from collections import Counter

import pytest

from exam_core.shuffle import shuffle, shuffle_choices

SEEDS = ["exam1", "exam1-A-order", "exam1-B-q3", "default", "x" * 40]


@pytest.mark.parametrize("seed", SEEDS)
def test_shuffle_is_permutation(seed):
    items = ["Q1", "Q2", "Q3", "Q4", "Q5", "Q6", "Q2"]
    out = shuffle(items, seed)
    assert len(out) == len(items)
    assert Counter(out) == Counter(items)


@pytest.mark.parametrize("seed", SEEDS)
def test_shuffle_is_deterministic(seed):
    items = list(range(30))
    assert shuffle(items, seed) == shuffle(items, seed)


def test_shuffle_does_not_mutate_input():
    items = [1, 2, 3, 4, 5]
    shuffle(items, "seed")
    assert items == [1, 2, 3, 4, 5]


def test_shuffle_small_inputs():
    assert shuffle([], "s") == []
    assert shuffle(["only"], "s") == ["only"]
    assert shuffle((3, 1), "s") in ([3, 1], [1, 3])


def test_shuffle_varies_with_seed():
    items = list(range(10))
    results = {tuple(shuffle(items, f"seed-{i}")) for i in range(20)}
    assert len(results) > 1, "Các seed khác nhau phải cho thứ tự khác nhau"


@pytest.mark.parametrize("seed", SEEDS)
@pytest.mark.parametrize("correct", ["A", "B", "C", "D"])
def test_shuffle_choices_keeps_correct_text(seed, correct):
    choices = {"A": "2", "B": "4", "C": "6", "D": "8"}
    new_choices, new_correct = shuffle_choices(choices, correct, seed)

    assert list(new_choices.keys()) == ["A", "B", "C", "D"]
    assert sorted(new_choices.values()) == sorted(choices.values())
    assert new_choices[new_correct] == choices[correct]


def test_shuffle_choices_relabels_from_a():
    choices = {"B": "first", "D": "second", "F": "third"}
    new_choices, new_correct = shuffle_choices(choices, "D", "relabel")
    assert list(new_choices.keys()) == ["A", "B", "C"]
    assert new_choices[new_correct] == "second"


def test_shuffle_choices_unknown_key():
    with pytest.raises(KeyError):
        shuffle_choices({"A": "x", "B": "y"}, "Z", "seed")
