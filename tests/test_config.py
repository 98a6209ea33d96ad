# tests/test_config.py

from exam_core.config import Settings, load_settings

ENV_KEYS = [
    "EXAM_SEED",
    "EXAM_UNGRADED_ANSWER",
    "EXAM_RUBRIC_ANSWER",
    "EXAM_POINTS_PER_QUESTION",
    "EXAM_LOG_LEVEL",
    "EXAM_OUTPUT_DIR",
]


def _clear(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults_without_env(tmp_path, monkeypatch):
    _clear(monkeypatch)
    settings = load_settings(str(tmp_path / "missing.env"))
    assert settings == Settings()


def test_values_from_env_file(tmp_path, monkeypatch):
    _clear(monkeypatch)
    env = tmp_path / ".env"
    env.write_text(
        "EXAM_SEED=final-2025\n"
        "EXAM_RUBRIC_ANSWER=See rubric\n"
        "EXAM_POINTS_PER_QUESTION=2\n"
        "EXAM_LOG_LEVEL=debug\n",
        encoding="utf-8",
    )
    settings = load_settings(str(env))
    assert settings.seed == "final-2025"
    assert settings.rubric_answer == "See rubric"
    assert settings.ungraded_answer == "N/A"
    assert settings.points_per_question == 2
    assert settings.log_level == "DEBUG"


def test_bad_integer_falls_back(monkeypatch):
    _clear(monkeypatch)
    monkeypatch.setenv("EXAM_POINTS_PER_QUESTION", "two")
    assert load_settings().points_per_question == 1
