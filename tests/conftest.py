# tests/conftest.py

import pytest

from exam_core.schema import Question


def make_mcq(qid, topic="Math", bloom="Remembering", difficulty="Easy", approved=True, n_choices=4):
    letters = "ABCDEF"[:n_choices]
    return Question(
        id=qid,
        text=f"Question {qid}?",
        type="mcq",
        topic=topic,
        bloom_level=bloom,
        difficulty=difficulty,
        choices={k: f"{qid} option {k}" for k in letters},
        correct_answer=letters[-1] if qid.endswith(("1", "3", "5")) else letters[1],
        approved=approved,
    )


@pytest.fixture
def mcq_factory():
    return make_mcq


@pytest.fixture
def six_math_questions():
    return [make_mcq(f"Q{i}") for i in range(1, 7)]


@pytest.fixture
def mixed_questions():
    return [
        make_mcq("M1", topic="Algebra", difficulty="Easy"),
        make_mcq("M2", topic="Algebra", difficulty="Average", bloom="Applying"),
        make_mcq("M3", topic="Geometry", difficulty="Difficult", bloom="Evaluating", n_choices=5),
        Question(
            id="TF1", text="The sum of angles in a triangle is 180 degrees.", type="true_false",
            topic="Geometry", bloom_level="Remembering", difficulty="Easy", correct_answer="True", approved=True,
        ),
        Question(
            id="E1", text="Explain why the proof works.", type="essay",
            topic="Geometry", bloom_level="Creating", difficulty="Difficult", approved=True,
        ),
        Question(
            id="S1", text="Name the longest side of a right triangle.", type="short_answer",
            topic="Geometry", bloom_level="Remembering", difficulty="Easy", approved=True,
        ),
    ]
