# exam_core/question_selector.py

from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable, List, Sequence, Set

from .schema import (
    Question,
    RequirementCheck,
    RequirementSupply,
    SelectionRequirement,
    SufficiencyReport,
)

logger = logging.getLogger(__name__)


# ============================
# Bộ lọc
# ============================

def _exact_match(q: Question, req: SelectionRequirement) -> bool:
    return (
        q.topic == req.topic
        and q.bloom_level == req.bloom_level
        and q.difficulty == req.difficulty
    )


def _relaxed_match(q: Question, req: SelectionRequirement) -> bool:
    # bỏ ràng buộc difficulty, giữ topic + bloom
    return q.topic == req.topic and q.bloom_level == req.bloom_level


def _take(
    pool: Iterable[Question],
    predicate: Callable[[Question], bool],
    selected_ids: Set[str],
    limit: int,
) -> List[Question]:
    picked: List[Question] = []
    if limit <= 0:
        return picked
    for q in pool:
        if not q.approved or q.id in selected_ids:
            continue
        if not predicate(q):
            continue
        picked.append(q)
        selected_ids.add(q.id)
        if len(picked) >= limit:
            break
    return picked


# ============================
# API chính
# ============================

def select_questions(
    pool: Sequence[Question],
    requirements: Sequence[SelectionRequirement],
) -> List[Question]:
    """
    Pick questions for each requirement in order.

    Ưu tiên:
        1) approved, exact topic + bloom + difficulty, pool order
        2) if short: same topic + bloom at any difficulty
        3) still short: left unfilled (never duplicates or invents)

    Selection is deduplicated by id across all requirements.
    """
    selected_ids: Set[str] = set()
    selected: List[Question] = []

    for req in requirements:
        exact = _take(pool, lambda q: _exact_match(q, req), selected_ids, req.count)
        selected.extend(exact)

        shortfall = req.count - len(exact)
        if shortfall > 0:
            relaxed = _take(pool, lambda q: _relaxed_match(q, req), selected_ids, shortfall)
            selected.extend(relaxed)
            if relaxed:
                logger.debug(
                    "Filled %d of %d missing for %s - %s - %s by relaxing difficulty",
                    len(relaxed), shortfall, req.topic, req.bloom_level, req.difficulty,
                )
            unfilled = shortfall - len(relaxed)
            if unfilled > 0:
                logger.debug(
                    "%d question(s) left unfilled for %s - %s - %s",
                    unfilled, req.topic, req.bloom_level, req.difficulty,
                )

    return selected


def _available(pool: Sequence[Question], req: SelectionRequirement) -> int:
    return sum(1 for q in pool if q.approved and _exact_match(q, req))


def validate_requirements(
    pool: Sequence[Question],
    requirements: Sequence[SelectionRequirement],
) -> RequirementCheck:
    """Exact-match supply check, no relaxation."""
    issues: List[str] = []
    for req in requirements:
        have = _available(pool, req)
        if have < req.count:
            issues.append(
                f"Insufficient questions for {req.topic} - {req.bloom_level} - {req.difficulty}: "
                f"need {req.count}, have {have}"
            )
    return RequirementCheck(valid=not issues, issues=issues)


def analyze_sufficiency(
    pool: Sequence[Question],
    requirements: Sequence[SelectionRequirement],
) -> SufficiencyReport:
    """Per-row supply table with recommendations for the bank maintainers."""
    analysis: Dict[str, RequirementSupply] = {}
    recommendations: List[str] = []
    total_shortage = 0

    for req in requirements:
        available = _available(pool, req)
        shortage = max(0, req.count - available)
        total_shortage += shortage
        analysis[f"{req.topic}-{req.bloom_level}-{req.difficulty}"] = RequirementSupply(
            needed=req.count,
            available=available,
            shortage=shortage,
        )
        if shortage > 0:
            recommendations.append(
                f'Add {shortage} more {req.difficulty} {req.bloom_level} questions for "{req.topic}"'
            )

    return SufficiencyReport(
        sufficient=total_shortage == 0,
        analysis=analysis,
        recommendations=recommendations,
    )
