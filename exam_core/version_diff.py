# exam_core/version_diff.py

from __future__ import annotations

from typing import Optional, Sequence

from .schema import DifferenceReport, FormItem, TestForm


def _choice_order_differs(item: FormItem, base: Optional[FormItem]) -> bool:
    if base is None:
        return False
    if not (item.type == "mcq" and item.choices and base.type == "mcq" and base.choices):
        return False
    return list(item.choices.values()) != list(base.choices.values())


def analyze_differences(versions: Sequence[TestForm]) -> DifferenceReport:
    """
    Compare every version against versions[0], position by position.
    Fewer than two versions -> all zero.
    """
    report = DifferenceReport()
    if len(versions) < 2:
        return report

    baseline = versions[0]
    for form in versions[1:]:
        order_changes = 0
        choice_changes = 0
        for idx, item in enumerate(form.items):
            base = baseline.items[idx] if idx < len(baseline.items) else None
            if base is not None and item.source_question_id != base.source_question_id:
                order_changes += 1
            if _choice_order_differs(item, base):
                choice_changes += 1

        report.question_order_changes[form.label] = order_changes
        report.choice_order_changes[form.label] = choice_changes
        report.total_differences += order_changes + choice_changes

    return report
