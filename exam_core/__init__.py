# exam_core/__init__.py

"""
Core module for deterministic multi-version test assembly

Bao gồm:
- Seeded random stream và Fisher-Yates shuffle tái tạo được
- Chọn câu theo Table of Specifications (topic, Bloom, difficulty)
- Sinh nhiều version A..F, xáo câu và đáp án, giữ đúng answer key
- Kiểm tra cân bằng và so sánh khác biệt giữa các version

Các thành phần xuất khẩu phổ biến:
    Question, SelectionRequirement, VersionOptions, TestForm, AnswerKey
    make_rng, shuffle, shuffle_choices
    select_questions, validate_requirements, analyze_sufficiency
    assemble_versions, assemble_one, validate_balance, analyze_differences
    generate_exam
"""

# Schema models
from .schema import (
    QUESTION_TYPES,
    BLOOM_LEVELS,
    DIFFICULTIES,
    VERSION_LABELS,
    Question,
    SelectionRequirement,
    VersionOptions,
    TestConfig,
    FormItem,
    TestForm,
    AnswerKey,
    AnswerKeyEntry,
    AssemblyResult,
    InvalidQuestionError,
    InvalidRequirementError,
    question_from_dict,
    requirement_from_dict,
)

# Randomness
from .seeded_random import (
    make_rng,
    string_hash,
)
from .shuffle import (
    shuffle,
    shuffle_choices,
)

# Selection & TOS planning
from .question_selector import (
    select_questions,
    validate_requirements,
    analyze_sufficiency,
)
from .tos_planner import (
    difficulty_for_bloom,
    requirements_from_matrix,
    requirements_from_topic_hours,
)

# Assembly & checks
from .version_assembler import (
    assemble_versions,
    assemble_one,
    validate_test_config,
)
from .balance import validate_balance
from .version_diff import analyze_differences
from .pipeline import GenerationReport, generate_exam


__all__ = [
    # Schema
    "QUESTION_TYPES",
    "BLOOM_LEVELS",
    "DIFFICULTIES",
    "VERSION_LABELS",
    "Question",
    "SelectionRequirement",
    "VersionOptions",
    "TestConfig",
    "FormItem",
    "TestForm",
    "AnswerKey",
    "AnswerKeyEntry",
    "AssemblyResult",
    "InvalidQuestionError",
    "InvalidRequirementError",
    "question_from_dict",
    "requirement_from_dict",

    # Randomness
    "make_rng",
    "string_hash",
    "shuffle",
    "shuffle_choices",

    # Selection
    "select_questions",
    "validate_requirements",
    "analyze_sufficiency",
    "difficulty_for_bloom",
    "requirements_from_matrix",
    "requirements_from_topic_hours",

    # Assembly
    "assemble_versions",
    "assemble_one",
    "validate_test_config",
    "validate_balance",
    "analyze_differences",
    "GenerationReport",
    "generate_exam",
]
