# tests/test_end_to_end.py

from exam_core import (
    SelectionRequirement,
    VersionOptions,
    analyze_differences,
    assemble_versions,
    generate_exam,
    select_questions,
    validate_balance,
)


def test_six_question_two_versions(six_math_questions):
    source = {q.id: q for q in six_math_questions}
    reqs = [SelectionRequirement("Math", "Remembering", "Easy", 6)]

    selected = select_questions(six_math_questions, reqs)
    assert [q.id for q in selected] == ["Q1", "Q2", "Q3", "Q4", "Q5", "Q6"]

    opts = VersionOptions(shuffle_questions=True, shuffle_choices=True, version_count=2, seed="exam1")
    result = assemble_versions(selected, opts, "Exam 1")

    assert [v.label for v in result.versions] == ["A", "B"]
    for form, key in zip(result.versions, result.answer_keys):
        assert len(form.items) == 6
        assert set(form.source_ids()) == {"Q1", "Q2", "Q3", "Q4", "Q5", "Q6"}
        for entry, item in zip(key.entries, form.items):
            q = source[item.source_question_id]
            assert item.choices[entry.answer] == q.choices[q.correct_answer]

    diff = analyze_differences(result.versions)
    assert diff.question_order_changes["B"] > 0
    assert validate_balance(result.versions).is_balanced


def test_generate_exam_reports_shortfall(six_math_questions, mcq_factory):
    pool = six_math_questions + [mcq_factory("G1", topic="Geometry", bloom="Applying", difficulty="Average")]
    reqs = [
        SelectionRequirement("Math", "Remembering", "Easy", 4),
        SelectionRequirement("Geometry", "Applying", "Average", 3),
    ]
    report = generate_exam(pool, reqs, VersionOptions(version_count=3, seed="gen"), "Quiz")

    assert [q.id for q in report.selected] == ["Q1", "Q2", "Q3", "Q4", "G1"]
    assert len(report.result.versions) == 3
    assert all(len(v.items) == 5 for v in report.result.versions)
    assert report.issues == [
        "Insufficient questions for Geometry - Applying - Average: need 3, have 1",
        "Selected 5 of 7 requested questions",
    ]
    assert report.warnings == []
    assert not report.ok

    data = report.to_dict()
    assert data["question_ids"] == ["Q1", "Q2", "Q3", "Q4", "G1"]
    assert [v["label"] for v in data["versions"]] == ["A", "B", "C"]
    assert len(data["answer_keys"][0]["keys"]) == 5


def test_generate_exam_clean_run(six_math_questions):
    reqs = [SelectionRequirement("Math", "Remembering", "Easy", 6)]
    report = generate_exam(six_math_questions, reqs, VersionOptions(version_count=2, seed="ok"), "Clean")
    assert report.ok
    assert report.differences.total_differences >= 0
