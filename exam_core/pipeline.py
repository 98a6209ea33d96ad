# exam_core/pipeline.py

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from .balance import validate_balance
from .question_selector import select_questions, validate_requirements
from .schema import (
    AssemblyResult,
    BalanceReport,
    DifferenceReport,
    Question,
    SelectionRequirement,
    VersionOptions,
)
from .version_assembler import assemble_versions
from .version_diff import analyze_differences

logger = logging.getLogger(__name__)


@dataclass
class GenerationReport:
    """Everything one generation run produces; the caller decides what is fatal."""
    title: str
    selected: List[Question] = field(default_factory=list)
    result: AssemblyResult = field(default_factory=AssemblyResult)
    issues: List[str] = field(default_factory=list)
    balance: BalanceReport = field(default_factory=lambda: BalanceReport(is_balanced=True))
    differences: DifferenceReport = field(default_factory=DifferenceReport)

    @property
    def warnings(self) -> List[str]:
        return self.balance.warnings

    @property
    def ok(self) -> bool:
        return not self.issues and not self.warnings

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "question_ids": [q.id for q in self.selected],
            **self.result.to_dict(),
            "issues": list(self.issues),
            "warnings": list(self.warnings),
            "differences": {
                "question_order_changes": dict(self.differences.question_order_changes),
                "choice_order_changes": dict(self.differences.choice_order_changes),
                "total_differences": self.differences.total_differences,
            },
        }


def generate_exam(
    pool: Sequence[Question],
    requirements: Sequence[SelectionRequirement],
    options: Optional[VersionOptions] = None,
    title: str = "",
) -> GenerationReport:
    """select -> assemble -> balance/diff, shortfalls reported as issues."""
    options = options or VersionOptions()

    check = validate_requirements(pool, requirements)
    selected = select_questions(pool, requirements)

    needed = sum(r.count for r in requirements)
    if len(selected) < needed:
        check.issues.append(f"Selected {len(selected)} of {needed} requested questions")

    result = assemble_versions(selected, options, title)
    balance = validate_balance(result.versions)
    differences = analyze_differences(result.versions)

    report = GenerationReport(
        title=title,
        selected=selected,
        result=result,
        issues=check.issues,
        balance=balance,
        differences=differences,
    )

    logger.info(
        "Exam %r: %d question(s), %d version(s), %d issue(s), %d warning(s)",
        title, len(selected), len(result.versions), len(report.issues), len(report.warnings),
    )
    for msg in report.issues:
        logger.warning(msg)
    return report
