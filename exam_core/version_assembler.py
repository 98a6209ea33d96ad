"""
exam_core/version_assembler.py
-----------------------------------
Build parallel exam versions (A..F) from one base question set.

Mỗi version có seed riêng "{seed}-{label}":
- question order: shuffle(base, "{seed}-{label}-order")
- mcq choices:    shuffle_choices(..., "{seed}-{label}-q{idx}")
so any version can be rebuilt alone from (seed, label).
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from .schema import (
    VERSION_LABELS,
    AnswerKey,
    AnswerKeyEntry,
    AssemblyResult,
    FormItem,
    Question,
    TestConfig,
    TestForm,
    VersionOptions,
)
from .shuffle import shuffle, shuffle_choices

logger = logging.getLogger(__name__)

MIN_TIME_LIMIT = 10  # phút


def clamp_version_count(count: int) -> int:
    clamped = min(max(int(count), 1), len(VERSION_LABELS))
    if clamped != count:
        logger.warning("version_count=%s out of range, using %d", count, clamped)
    return clamped


def version_seed(seed: str, label: str) -> str:
    return f"{seed}-{label}"


def _build_item(
    question: Question,
    idx: int,
    label: str,
    vseed: str,
    options: VersionOptions,
) -> FormItem:
    choices = dict(question.choices) if question.choices is not None else None
    correct = question.correct_answer

    if options.shuffle_choices and question.is_mcq and choices:
        if correct not in choices:
            logger.warning(
                "Question %s: correct answer %r not among choices, choices left unshuffled",
                question.id, correct,
            )
        elif len(choices) > len(VERSION_LABELS):
            logger.warning(
                "Question %s: %d choices, at most %d can be relabelled, choices left unshuffled",
                question.id, len(choices), len(VERSION_LABELS),
            )
        else:
            choices, correct = shuffle_choices(choices, correct, f"{vseed}-q{idx}")

    return FormItem(
        item_id=f"{label}-{idx + 1}",
        position=idx + 1,
        source_question_id=question.id,
        text=question.text,
        type=question.type,
        topic=question.topic,
        bloom_level=question.bloom_level,
        difficulty=question.difficulty,
        choices=choices,
        correct_answer=correct,
    )


def _key_answer(item: FormItem, options: VersionOptions) -> str:
    if item.correct_answer:
        return item.correct_answer
    if item.type == "essay" and options.rubric_answer:
        return options.rubric_answer
    return options.ungraded_answer


def build_answer_key(form: TestForm, options: VersionOptions) -> AnswerKey:
    return AnswerKey(
        label=form.label,
        entries=[AnswerKeyEntry(question_number=it.position, answer=_key_answer(it, options)) for it in form.items],
    )


def build_version(
    base_questions: Sequence[Question],
    label: str,
    options: VersionOptions,
    title: str = "",
) -> TestForm:
    """Assemble a single version; depends only on (base_questions, options, label)."""
    vseed = version_seed(options.seed, label)

    if options.shuffle_questions:
        ordered = shuffle(base_questions, f"{vseed}-order")
    else:
        ordered = list(base_questions)

    items = [_build_item(q, idx, label, vseed, options) for idx, q in enumerate(ordered)]
    logger.debug("Version %s: %d items, seed %s", label, len(items), vseed)

    return TestForm(
        label=label,
        title=title,
        seed=vseed,
        items=items,
        points_per_question=options.points_per_question,
    )


def assemble_versions(
    base_questions: Sequence[Question],
    options: Optional[VersionOptions] = None,
    title: str = "",
) -> AssemblyResult:
    """
    Produce `version_count` forms labelled A, B, C... plus one answer key each.

    Empty input is not an error: each version is returned with no items.
    """
    options = options or VersionOptions()
    count = clamp_version_count(options.version_count)

    result = AssemblyResult()
    for label in VERSION_LABELS[:count]:
        form = build_version(base_questions, label, options, title)
        result.versions.append(form)
        result.answer_keys.append(build_answer_key(form, options))

    logger.info(
        "Assembled %d version(s) of %r with %d question(s) each",
        count, title, len(base_questions),
    )
    return result


def assemble_one(
    questions: Sequence[Question],
    label: str = "A",
    title: str = "",
    options: Optional[VersionOptions] = None,
) -> TestForm:
    """Single-form shortcut; for label "A" this equals assemble_versions(...).versions[0]."""
    return build_version(questions, label, options or VersionOptions(), title)


def validate_test_config(config: TestConfig, questions: Sequence[Question]) -> List[str]:
    """Errors that should stop generation before any version is built."""
    errors: List[str] = []

    if not config.title.strip():
        errors.append("Test title is required")

    if not config.subject.strip():
        errors.append("Subject is required")

    if len(questions) == 0:
        errors.append("At least one question must be selected")

    if config.number_of_versions < 1 or config.number_of_versions > len(VERSION_LABELS):
        errors.append(f"Number of versions must be between 1 and {len(VERSION_LABELS)}")

    if config.points_per_question < 1:
        errors.append("Points per question must be at least 1")

    if config.time_limit is not None and config.time_limit < MIN_TIME_LIMIT:
        errors.append(f"Time limit must be at least {MIN_TIME_LIMIT} minutes")

    return errors
