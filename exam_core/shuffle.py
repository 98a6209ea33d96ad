# exam_core/shuffle.py

from __future__ import annotations

import math
from typing import Dict, List, Mapping, Sequence, Tuple, TypeVar

from .schema import VERSION_LABELS
from .seeded_random import make_rng

T = TypeVar("T")


def shuffle(items: Sequence[T], seed: str) -> List[T]:
    """
    Fisher-Yates driven by make_rng(seed).
    Trả về list mới, không đổi input.
    """
    rng = make_rng(seed)
    out = list(items)
    for i in range(len(out) - 1, 0, -1):
        j = math.floor(rng() * (i + 1))
        out[i], out[j] = out[j], out[i]
    return out


# Xáo đáp án nhưng giữ đúng correct_answer
def shuffle_choices(
    choices: Mapping[str, str],
    correct_answer: str,
    seed: str,
) -> Tuple[Dict[str, str], str]:
    """
    Shuffle the (key, text) entries of an mcq and relabel them A, B, C...
    in shuffled order. The returned key points at the entry whose original
    key was `correct_answer`, so its text is unchanged.

    Caller guarantees correct_answer in choices and len(choices) <= 6.
    """
    entries = shuffle(list(choices.items()), seed)

    new_choices: Dict[str, str] = {}
    new_correct = None
    for idx, (original_key, text) in enumerate(entries):
        new_key = VERSION_LABELS[idx]
        new_choices[new_key] = text
        if original_key == correct_answer:
            new_correct = new_key

    if new_correct is None:
        raise KeyError(correct_answer)
    return new_choices, new_correct
