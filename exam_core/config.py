# exam_core/config.py

import os
import logging
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

LOG_FORMAT = "[%(asctime)s] %(levelname)s - %(message)s"


@dataclass(frozen=True)
class Settings:
    """
    Defaults for generation runs, read from the environment (.env):
        EXAM_SEED=default
        EXAM_UNGRADED_ANSWER=N/A
        EXAM_RUBRIC_ANSWER=See rubric
        EXAM_POINTS_PER_QUESTION=1
        EXAM_LOG_LEVEL=INFO
        EXAM_OUTPUT_DIR=results
    """
    seed: str = "default"
    ungraded_answer: str = "N/A"
    rubric_answer: Optional[str] = None
    points_per_question: int = 1
    log_level: str = "INFO"
    output_dir: str = "results"


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logging.getLogger(__name__).warning("%s=%r is not an integer, using %d", name, raw, default)
        return default


def load_settings(env_path: Optional[str] = None) -> Settings:
    load_dotenv(dotenv_path=env_path)
    return Settings(
        seed=os.getenv("EXAM_SEED", "default"),
        ungraded_answer=os.getenv("EXAM_UNGRADED_ANSWER", "N/A"),
        rubric_answer=os.getenv("EXAM_RUBRIC_ANSWER") or None,
        points_per_question=_int_env("EXAM_POINTS_PER_QUESTION", 1),
        log_level=os.getenv("EXAM_LOG_LEVEL", "INFO").upper(),
        output_dir=os.getenv("EXAM_OUTPUT_DIR", "results"),
    )


def setup_logging(level: str = "INFO", log_file: Optional[str] = None) -> None:
    handlers = [logging.StreamHandler()]
    if log_file:
        os.makedirs(os.path.dirname(log_file) or ".", exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
    )
