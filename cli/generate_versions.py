"""
cli/generate_versions.py
-----------------------------------
Sinh các version A..F cho một hoặc nhiều đề thi từ file JSON.

    python -m cli.generate_versions --bank data/questions.json --plan data/plan.json

bank: list of question records (or {"questions": [...]})
plan: one exam object or {"exams": [...]}, each with
      title, subject, options, and one of
      requirements | tos.matrix | tos.topics + tos.total_items
"""

import os
import re
import sys
import json
import logging
import argparse
from typing import Any, Dict, List, Optional, Sequence, Set

from rich.console import Console
from rich.table import Table
from tqdm import tqdm

from exam_core.config import Settings, load_settings, setup_logging
from exam_core.pipeline import GenerationReport, generate_exam
from exam_core.schema import (
    InvalidQuestionError,
    InvalidRequirementError,
    Question,
    SelectionRequirement,
    TestConfig,
    question_from_dict,
    requirement_from_dict,
)
from exam_core.tos_planner import requirements_from_matrix, requirements_from_topic_hours
from exam_core.version_assembler import validate_test_config

console = Console()
logger = logging.getLogger("cli.generate_versions")


# ==============================
# Đọc dữ liệu
# ==============================

def load_json(path: str) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def load_bank(path: str) -> List[Question]:
    raw = load_json(path)
    records = raw.get("questions", []) if isinstance(raw, dict) else raw
    questions = [question_from_dict(r) for r in records]
    logger.info(f"Loaded {len(questions)} questions from {path}")
    return questions


def plan_requirements(exam: Dict[str, Any]) -> List[SelectionRequirement]:
    if "requirements" in exam:
        return [requirement_from_dict(r) for r in exam["requirements"]]

    tos = exam.get("tos") or {}
    if "matrix" in tos:
        try:
            return requirements_from_matrix(tos["matrix"])
        except ValueError as e:
            raise InvalidRequirementError(str(e), tos) from e
    if "topics" in tos:
        try:
            topics = [(t["topic"], float(t.get("hours", 0))) for t in tos["topics"]]
            total_items = int(tos.get("total_items", 0))
        except KeyError as e:
            raise InvalidRequirementError(f"TOS topic row missing {e}", tos) from e
        except (TypeError, ValueError, AttributeError) as e:
            raise InvalidRequirementError(f"Bad TOS topics: {e}", tos) from e
        return requirements_from_topic_hours(topics, total_items)

    raise InvalidRequirementError(f"Exam {exam.get('title')!r} has no requirements or tos", exam)


def _flag(opts: Dict[str, Any], name: str, default: bool) -> bool:
    value = opts.get(name, default)
    # "false" as a string would be truthy
    if not isinstance(value, bool):
        raise InvalidRequirementError(f"Option {name} must be true or false, got {value!r}", opts)
    return value


def exam_config(exam: Dict[str, Any], settings: Settings) -> TestConfig:
    opts = exam.get("options") or {}
    if not isinstance(opts, dict):
        raise InvalidRequirementError(f"Exam {exam.get('title')!r}: options must be an object", exam)

    try:
        time_limit = opts.get("time_limit")
        return TestConfig(
            title=exam.get("title", ""),
            subject=exam.get("subject", ""),
            instructions=exam.get("instructions", ""),
            time_limit=int(time_limit) if time_limit is not None else None,
            points_per_question=int(opts.get("points_per_question", settings.points_per_question)),
            shuffle_questions=_flag(opts, "shuffle_questions", True),
            shuffle_choices=_flag(opts, "shuffle_choices", True),
            number_of_versions=int(opts.get("number_of_versions", 1)),
            seed=str(opts.get("seed", settings.seed)),
        )
    except (TypeError, ValueError) as e:
        raise InvalidRequirementError(f"Exam {exam.get('title')!r}: bad option value ({e})", opts) from e


def slugify(title: str) -> str:
    slug = re.sub(r"[^A-Za-z0-9]+", "_", title).strip("_").lower()
    return slug or "exam"


# ==============================
# Hiển thị
# ==============================

def print_report(report: GenerationReport, config_errors: Sequence[str] = ()) -> None:
    table = Table(title=f"📝 {report.title}")
    table.add_column("Version", style="cyan")
    table.add_column("Items", justify="right")
    table.add_column("Points", justify="right")
    table.add_column("Order changes", justify="right")
    table.add_column("Choice changes", justify="right")

    diff = report.differences
    for form in report.result.versions:
        table.add_row(
            form.label,
            str(len(form.items)),
            str(form.total_points),
            str(diff.question_order_changes.get(form.label, 0)),
            str(diff.choice_order_changes.get(form.label, 0)),
        )
    console.print(table)

    for msg in config_errors:
        console.print(f"[red]✖ {msg}[/red]")
    for msg in report.issues:
        console.print(f"[yellow]⚠️ {msg}[/yellow]")
    for msg in report.warnings:
        console.print(f"[yellow]⚖️ {msg}[/yellow]")
    if report.ok and not config_errors:
        console.print("[green]✅ Balanced, all requirements met[/green]")


def write_report(report: GenerationReport, output_dir: str, name: Optional[str] = None) -> str:
    os.makedirs(output_dir, exist_ok=True)
    path = os.path.join(output_dir, f"{name or slugify(report.title)}.json")
    with open(path, "w", encoding="utf-8") as f:
        json.dump(report.to_dict(), f, ensure_ascii=False, indent=2)
    return path


# ==============================
# Main
# ==============================

def run(
    bank_path: str,
    plan_path: str,
    output_dir: Optional[str] = None,
    strict: bool = False,
    settings: Optional[Settings] = None,
) -> int:
    settings = settings or Settings()
    output_dir = output_dir or settings.output_dir

    try:
        pool = load_bank(bank_path)
        plan = load_json(plan_path)
        exams = plan.get("exams", [plan]) if isinstance(plan, dict) else list(plan)
        jobs = [(exam, plan_requirements(exam), exam_config(exam, settings)) for exam in exams]
    except (InvalidQuestionError, InvalidRequirementError) as e:
        logger.error(f"Invalid input: {e}")
        return 1
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Cannot read input: {e}")
        return 1

    problems = 0
    written: Set[str] = set()
    for exam, requirements, config in tqdm(jobs, desc="Exams", unit="exam", disable=len(jobs) < 2):
        options = config.version_options(settings.ungraded_answer, settings.rubric_answer)
        report = generate_exam(pool, requirements, options, config.title)
        config_errors = validate_test_config(config, report.selected)

        print_report(report, config_errors)
        if config_errors:
            logger.error(f"Exam {config.title!r} not saved: {', '.join(config_errors)}")
            problems += 1
            continue

        name = base = slugify(config.title)
        n = 1
        while name in written:
            n += 1
            name = f"{base}_{n}"
        if name != base:
            logger.warning(f"Exam {config.title!r} shares file name {base!r}, saving as {name!r}")
        written.add(name)
        path = write_report(report, output_dir, name)
        logger.info(f"Saved {config.title!r} to {path}")
        if not report.ok:
            problems += 1

    return 1 if (strict and problems) else 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate shuffled exam versions with answer keys")
    parser.add_argument("--bank", required=True, help="question bank JSON")
    parser.add_argument("--plan", required=True, help="exam plan JSON")
    parser.add_argument("--out", default=None, help="output directory (default EXAM_OUTPUT_DIR)")
    parser.add_argument("--env", default=None, help=".env file")
    parser.add_argument("--strict", action="store_true", help="exit 1 on any issue or balance warning")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = load_settings(args.env)
    setup_logging(settings.log_level)
    return run(args.bank, args.plan, args.out, args.strict, settings)


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        console.print("\n[red]Đã dừng chương trình.[/red]")
        sys.exit(130)
