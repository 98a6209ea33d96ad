# tests/test_balance.py

from exam_core.balance import validate_balance
from exam_core.schema import FormItem, TestForm, VersionOptions
from exam_core.version_assembler import assemble_versions


def _form(label, topics, difficulties=None):
    difficulties = difficulties or ["Easy"] * len(topics)
    items = [
        FormItem(
            item_id=f"{label}-{i + 1}", position=i + 1, source_question_id=f"{label}{i}",
            text="?", type="essay", topic=t, bloom_level="Remembering", difficulty=d,
        )
        for i, (t, d) in enumerate(zip(topics, difficulties))
    ]
    return TestForm(label=label, title="T", seed=f"s-{label}", items=items)


def test_uneven_topic_is_reported():
    a = _form("A", ["X"] * 4 + ["Y"] * 6)
    b = _form("B", ["X"] * 7 + ["Y"] * 3)
    report = validate_balance([a, b])

    assert not report.is_balanced
    assert any('"X"' in w and "[4, 7]" in w for w in report.warnings), report.warnings
    assert any('"Y"' in w and "[6, 3]" in w for w in report.warnings), report.warnings


def test_topic_spread_of_one_is_fine():
    a = _form("A", ["X"] * 5 + ["Y"] * 5)
    b = _form("B", ["X"] * 6 + ["Y"] * 4)
    assert validate_balance([a, b]).is_balanced


def test_topic_missing_from_one_version():
    a = _form("A", ["X", "X", "Z"])
    b = _form("B", ["X", "Y", "Y"])
    report = validate_balance([a, b])
    assert 'Topic "X" has uneven distribution across versions: [2, 1]' not in report.warnings
    assert 'Topic "Y" has uneven distribution across versions: [0, 2]' in report.warnings


def test_different_item_counts():
    report = validate_balance([_form("A", ["X"] * 3), _form("B", ["X"] * 4)])
    assert "Versions have different question counts: [3, 4]" in report.warnings


def test_difficulty_imbalance_over_two():
    a = _form("A", ["X"] * 6, ["Easy"] * 6)
    b = _form("B", ["X"] * 6, ["easy"] * 3 + ["Difficult"] * 3)
    report = validate_balance([a, b])
    assert report.warnings == [
        'Difficulty "Easy" has significant imbalance across versions: [6, 3]',
        'Difficulty "Difficult" has significant imbalance across versions: [0, 3]',
    ]


def test_difficulty_spread_of_two_is_fine():
    a = _form("A", ["X"] * 4, ["Easy"] * 4)
    b = _form("B", ["X"] * 4, ["Easy"] * 2 + ["Average"] * 2)
    assert validate_balance([a, b]).is_balanced


def test_no_versions():
    report = validate_balance([])
    assert not report.is_balanced
    assert report.warnings == ["No versions to validate"]


def test_assembled_versions_are_balanced(mixed_questions):
    result = assemble_versions(mixed_questions, VersionOptions(version_count=6, seed="bal"), "T")
    report = validate_balance(result.versions)
    assert report.is_balanced, report.warnings
