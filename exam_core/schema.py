# exam_core/schema.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional


QUESTION_TYPES = ("mcq", "true_false", "essay", "short_answer")

# Thứ tự Bloom: Remembering -> Creating
BLOOM_LEVELS = (
    "Remembering",
    "Understanding",
    "Applying",
    "Analyzing",
    "Evaluating",
    "Creating",
)

DIFFICULTIES = ("Easy", "Average", "Difficult")

VERSION_LABELS = ("A", "B", "C", "D", "E", "F")

MIN_CHOICES = 2


# ============================
# Boundary errors
# ============================

class InvalidQuestionError(ValueError):
    """Raised when a question record from the bank has the wrong shape."""

    def __init__(self, message: str, question_id: Optional[str] = None, field_name: Optional[str] = None):
        super().__init__(message)
        self.question_id = question_id
        self.field_name = field_name


class InvalidRequirementError(ValueError):
    """Raised when a distribution row cannot be used for selection."""

    def __init__(self, message: str, row: Optional[Mapping[str, Any]] = None):
        super().__init__(message)
        self.row = dict(row) if row else None


# ============================
# Input records
# ============================

@dataclass(frozen=True)
class Question:
    """
    Question from the bank, read-only to the generator. Only approved ones are selectable.
    - choices: letter -> option text, mcq only
    - correct_answer: a key of choices for mcq, "True"/"False" for true_false
    """
    id: str
    text: str
    type: str
    topic: str
    bloom_level: str
    difficulty: str
    choices: Optional[Dict[str, str]] = None
    correct_answer: Optional[str] = None
    approved: bool = False

    @property
    def is_mcq(self) -> bool:
        return self.type == "mcq"


@dataclass(frozen=True)
class SelectionRequirement:
    """One row of a distribution plan."""
    topic: str
    bloom_level: str
    difficulty: str
    count: int


@dataclass(frozen=True)
class VersionOptions:
    shuffle_questions: bool = True
    shuffle_choices: bool = True
    version_count: int = 1
    seed: str = "default"
    ungraded_answer: str = "N/A"
    rubric_answer: Optional[str] = None  # key sentinel for essay items
    points_per_question: int = 1


@dataclass
class TestConfig:
    """Exam metadata entered by the teacher before generation."""
    __test__ = False  # not a pytest class
    title: str
    subject: str = ""
    instructions: str = ""
    time_limit: Optional[int] = None  # minutes
    points_per_question: int = 1
    shuffle_questions: bool = True
    shuffle_choices: bool = True
    number_of_versions: int = 1
    seed: str = "default"

    def version_options(self, ungraded_answer: str = "N/A", rubric_answer: Optional[str] = None) -> VersionOptions:
        return VersionOptions(
            shuffle_questions=self.shuffle_questions,
            shuffle_choices=self.shuffle_choices,
            version_count=self.number_of_versions,
            seed=self.seed,
            ungraded_answer=ungraded_answer,
            rubric_answer=rubric_answer,
            points_per_question=self.points_per_question,
        )


# ============================
# Generated forms
# ============================

@dataclass(frozen=True)
class FormItem:
    item_id: str
    position: int
    source_question_id: str
    text: str
    type: str
    topic: str
    bloom_level: str
    difficulty: str
    choices: Optional[Dict[str, str]] = None
    correct_answer: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.item_id,
            "order": self.position,
            "question_id": self.source_question_id,
            "question_text": self.text,
            "question_type": self.type,
            "choices": dict(self.choices) if self.choices is not None else None,
            "correct_answer": self.correct_answer,
            "topic": self.topic,
            "bloom_level": self.bloom_level,
            "difficulty": self.difficulty,
        }


@dataclass
class TestForm:
    """One version (A..F) of an exam."""
    __test__ = False
    label: str
    title: str
    seed: str
    items: List[FormItem] = field(default_factory=list)
    points_per_question: int = 1

    @property
    def total_points(self) -> int:
        return len(self.items) * self.points_per_question

    def source_ids(self) -> List[str]:
        return [it.source_question_id for it in self.items]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "label": self.label,
            "title": self.title,
            "seed": self.seed,
            "total_points": self.total_points,
            "items": [it.to_dict() for it in self.items],
        }


@dataclass(frozen=True)
class AnswerKeyEntry:
    question_number: int
    answer: str


@dataclass
class AnswerKey:
    label: str
    entries: List[AnswerKeyEntry] = field(default_factory=list)

    def as_mapping(self) -> Dict[int, str]:
        return {e.question_number: e.answer for e in self.entries}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "label": self.label,
            "keys": [{"number": e.question_number, "answer": e.answer} for e in self.entries],
        }


@dataclass
class AssemblyResult:
    versions: List[TestForm] = field(default_factory=list)
    answer_keys: List[AnswerKey] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "versions": [v.to_dict() for v in self.versions],
            "answer_keys": [k.to_dict() for k in self.answer_keys],
        }


# ============================
# Reports
# ============================

@dataclass
class RequirementCheck:
    valid: bool
    issues: List[str] = field(default_factory=list)


@dataclass
class RequirementSupply:
    needed: int
    available: int
    shortage: int

    @property
    def sufficient(self) -> bool:
        return self.shortage == 0


@dataclass
class SufficiencyReport:
    sufficient: bool
    analysis: Dict[str, RequirementSupply] = field(default_factory=dict)
    recommendations: List[str] = field(default_factory=list)


@dataclass
class BalanceReport:
    is_balanced: bool
    warnings: List[str] = field(default_factory=list)


@dataclass
class DifferenceReport:
    question_order_changes: Dict[str, int] = field(default_factory=dict)
    choice_order_changes: Dict[str, int] = field(default_factory=dict)
    total_differences: int = 0


# ============================
# Loaders (JSON của ngân hàng câu hỏi)
# ============================

def _canonical(value: str, allowed: tuple) -> Optional[str]:
    needle = str(value).strip().lower()
    for a in allowed:
        if a.lower() == needle:
            return a
    return None


def canonical_bloom(value: str) -> Optional[str]:
    return _canonical(value, BLOOM_LEVELS)


def canonical_difficulty(value: str) -> Optional[str]:
    return _canonical(value, DIFFICULTIES)


def question_from_dict(raw: Mapping[str, Any]) -> Question:
    """
    Build a Question from a bank record, rejecting malformed ones.

    Accepts both the bank's column names (question_text, question_type)
    and the short ones (text, type).
    """
    qid = raw.get("id")
    if qid is None or str(qid) == "":
        raise InvalidQuestionError("Question is missing an id", field_name="id")
    qid = str(qid)

    qtype = str(raw.get("question_type", raw.get("type", ""))).strip().lower()
    if qtype == "multiple_choice":
        qtype = "mcq"
    if qtype not in QUESTION_TYPES:
        raise InvalidQuestionError(f"Unknown question type {qtype!r}", qid, "type")

    bloom = canonical_bloom(raw.get("bloom_level", ""))
    if bloom is None:
        raise InvalidQuestionError(f"Unknown Bloom level {raw.get('bloom_level')!r}", qid, "bloom_level")

    difficulty = canonical_difficulty(raw.get("difficulty", ""))
    if difficulty is None:
        raise InvalidQuestionError(f"Unknown difficulty {raw.get('difficulty')!r}", qid, "difficulty")

    choices = raw.get("choices")
    correct = raw.get("correct_answer")
    if qtype == "mcq":
        if not isinstance(choices, Mapping) or len(choices) < MIN_CHOICES:
            raise InvalidQuestionError("mcq needs at least 2 choices", qid, "choices")
        if len(choices) > len(VERSION_LABELS):
            raise InvalidQuestionError(f"mcq supports at most {len(VERSION_LABELS)} choices", qid, "choices")
        choices = {str(k): str(v) for k, v in choices.items()}
        if correct is None or str(correct) not in choices:
            raise InvalidQuestionError(f"Correct answer {correct!r} is not one of the choices", qid, "correct_answer")
    else:
        choices = None

    return Question(
        id=qid,
        text=str(raw.get("question_text", raw.get("text", ""))),
        type=qtype,
        topic=str(raw.get("topic", "")),
        bloom_level=bloom,
        difficulty=difficulty,
        choices=choices,
        correct_answer=str(correct) if correct is not None else None,
        approved=bool(raw.get("approved", False)),
    )


def requirement_from_dict(raw: Mapping[str, Any]) -> SelectionRequirement:
    bloom = canonical_bloom(raw.get("bloom_level", ""))
    difficulty = canonical_difficulty(raw.get("difficulty", ""))
    if bloom is None or difficulty is None:
        raise InvalidRequirementError("Requirement has unknown Bloom level or difficulty", raw)
    try:
        count = int(raw.get("count", 0))
    except (TypeError, ValueError):
        raise InvalidRequirementError(f"Requirement count {raw.get('count')!r} is not an integer", raw)
    if count < 0:
        raise InvalidRequirementError("Requirement count must not be negative", raw)
    return SelectionRequirement(
        topic=str(raw.get("topic", "")),
        bloom_level=bloom,
        difficulty=difficulty,
        count=count,
    )
