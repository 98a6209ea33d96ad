# exam_core/balance.py

from __future__ import annotations

from collections import Counter
from typing import Dict, List, Sequence

from .schema import DIFFICULTIES, BalanceReport, TestForm

# Chênh lệch tối đa giữa các version
MAX_TOPIC_SPREAD = 1
MAX_DIFFICULTY_SPREAD = 2


def _topic_counts(form: TestForm) -> Counter:
    return Counter(it.topic for it in form.items)


def _difficulty_counts(form: TestForm) -> Counter:
    return Counter(it.difficulty.lower() for it in form.items)


def _spread(counts: List[int]) -> int:
    return max(counts) - min(counts)


def validate_balance(versions: Sequence[TestForm]) -> BalanceReport:
    """
    Advisory fairness check across versions (never raises):
    - equal item counts
    - per-topic counts within MAX_TOPIC_SPREAD
    - per-difficulty counts within MAX_DIFFICULTY_SPREAD
    """
    if not versions:
        return BalanceReport(is_balanced=False, warnings=["No versions to validate"])

    warnings: List[str] = []

    item_counts = [len(v.items) for v in versions]
    if len(set(item_counts)) > 1:
        warnings.append(f"Versions have different question counts: {item_counts}")

    topic_dists = [_topic_counts(v) for v in versions]
    all_topics: Dict[str, None] = {}
    for v in versions:
        for it in v.items:
            all_topics.setdefault(it.topic, None)

    for topic in all_topics:
        counts = [dist.get(topic, 0) for dist in topic_dists]
        if _spread(counts) > MAX_TOPIC_SPREAD:
            warnings.append(f'Topic "{topic}" has uneven distribution across versions: {counts}')

    diff_dists = [_difficulty_counts(v) for v in versions]
    for difficulty in DIFFICULTIES:
        counts = [dist.get(difficulty.lower(), 0) for dist in diff_dists]
        if _spread(counts) > MAX_DIFFICULTY_SPREAD:
            warnings.append(f'Difficulty "{difficulty}" has significant imbalance across versions: {counts}')

    return BalanceReport(is_balanced=not warnings, warnings=warnings)
