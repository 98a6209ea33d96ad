# exam_core/tos_planner.py

from __future__ import annotations

import math
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from .schema import BLOOM_LEVELS, SelectionRequirement, canonical_bloom


# ============================
# Bloom -> difficulty
# ============================

BLOOM_DIFFICULTY: Dict[str, str] = {
    "Remembering": "Easy",
    "Understanding": "Easy",
    "Applying": "Average",
    "Analyzing": "Average",
    "Evaluating": "Difficult",
    "Creating": "Difficult",
}

# Phân bổ chuẩn theo Bloom trong mỗi topic (tổng = 1.0)
STANDARD_BLOOM_WEIGHTS: Dict[str, float] = {
    "Remembering": 0.15,
    "Understanding": 0.15,
    "Applying": 0.20,
    "Analyzing": 0.20,
    "Evaluating": 0.15,
    "Creating": 0.15,
}


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def difficulty_for_bloom(bloom_level: str) -> str:
    """Lower Bloom levels are Easy, the middle two Average, the top two Difficult."""
    level = canonical_bloom(bloom_level)
    if level is None:
        raise ValueError(f"Unknown Bloom level {bloom_level!r}")
    return BLOOM_DIFFICULTY[level]


# ============================
# TOS matrix -> requirements
# ============================

def requirements_from_matrix(matrix: Mapping[str, Mapping[str, int]]) -> List[SelectionRequirement]:
    """
    Trả về một dòng cho mỗi ô > 0 của ma trận:
    {
      topic: {bloom_level: count, ...},
      ...
    }
    Topics keep insertion order, Bloom levels follow the canonical order.
    """
    rows: List[SelectionRequirement] = []
    for topic, cells in matrix.items():
        by_level: Dict[str, int] = {}
        for raw_level, count in cells.items():
            level = canonical_bloom(raw_level)
            if level is None:
                raise ValueError(f"Unknown Bloom level {raw_level!r} for topic {topic!r}")
            by_level[level] = by_level.get(level, 0) + int(count or 0)

        for level in BLOOM_LEVELS:
            count = by_level.get(level, 0)
            if count > 0:
                rows.append(SelectionRequirement(
                    topic=topic,
                    bloom_level=level,
                    difficulty=BLOOM_DIFFICULTY[level],
                    count=count,
                ))
    return rows


def topic_item_counts(topics: Sequence[Tuple[str, float]], total_items: int) -> Dict[str, int]:
    """Items per topic proportional to instruction hours."""
    total_hours = sum(max(0.0, h) for _, h in topics)
    if total_hours <= 0:
        return {}
    return {
        topic: _round_half_up(total_items * max(0.0, hours) / total_hours)
        for topic, hours in topics
    }


def requirements_from_topic_hours(
    topics: Sequence[Tuple[str, float]],
    total_items: int,
    bloom_weights: Optional[Mapping[str, float]] = None,
) -> List[SelectionRequirement]:
    """
    Build the plan from (topic, hours) pairs:
    - topic share = hours / total hours
    - each topic spread over Bloom levels with `bloom_weights`
    Rounding is half-up per cell, so the sum can drift from total_items by a few.
    """
    weights = dict(bloom_weights or STANDARD_BLOOM_WEIGHTS)
    per_topic = topic_item_counts(topics, total_items)

    rows: List[SelectionRequirement] = []
    for topic, _ in topics:
        topic_items = per_topic.get(topic, 0)
        for level in BLOOM_LEVELS:
            count = _round_half_up(topic_items * weights.get(level, 0.0))
            if count > 0:
                rows.append(SelectionRequirement(
                    topic=topic,
                    bloom_level=level,
                    difficulty=BLOOM_DIFFICULTY[level],
                    count=count,
                ))
    return rows


def total_required(requirements: Sequence[SelectionRequirement]) -> int:
    return sum(r.count for r in requirements)
