"""Settings loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv


def _load_env() -> None:
    """Load .env from project root if it exists."""
    env_path = Path(__file__).resolve().parent.parent / ".env"
    if env_path.exists():
        load_dotenv(env_path)


_load_env()

DEFAULT_QUESTION_THRESHOLD = 0.85
DEFAULT_OPTIONS_THRESHOLD = 0.75


@dataclass(frozen=True)
class Settings:
    # Corpus location
    data_dir: str = field(default_factory=lambda: os.environ.get("QUIZ_DATA_DIR", "data"))
    prefix_config: str = field(
        default_factory=lambda: os.environ.get("PREFIX_CONFIG", "sub-category-data.json")
    )

    # Prefix filter bypass
    check_all_sources: bool = field(
        default_factory=lambda: os.environ.get("CHECK_ALL_SOURCES", "false").lower() == "true"
    )

    # Similarity policy
    question_threshold: float = field(
        default_factory=lambda: float(
            os.environ.get("SIMILARITY_THRESHOLD_QUESTION", str(DEFAULT_QUESTION_THRESHOLD))
        )
    )
    options_threshold: float = field(
        default_factory=lambda: float(
            os.environ.get("SIMILARITY_THRESHOLD_OPTIONS", str(DEFAULT_OPTIONS_THRESHOLD))
        )
    )
    similarity_workers: int = field(
        default_factory=lambda: int(os.environ.get("SIMILARITY_WORKERS", "1"))
    )

    # Run event log (empty disables it)
    run_log_dir: str = field(default_factory=lambda: os.environ.get("RUN_LOG_DIR", ""))

    def prefix_config_path(self) -> Path:
        """Resolve the prefix config relative to the data directory unless absolute."""
        path = Path(self.prefix_config)
        if path.is_absolute():
            return path
        return Path(self.data_dir) / path

    def validate(self) -> list[str]:
        """Return list of validation errors. Empty list means valid."""
        errors = []
        if not 0.0 <= self.question_threshold <= 1.0:
            errors.append(
                f"SIMILARITY_THRESHOLD_QUESTION must be in [0, 1], got {self.question_threshold}"
            )
        if not 0.0 <= self.options_threshold <= 1.0:
            errors.append(
                f"SIMILARITY_THRESHOLD_OPTIONS must be in [0, 1], got {self.options_threshold}"
            )
        if self.similarity_workers < 1:
            errors.append(f"SIMILARITY_WORKERS must be >= 1, got {self.similarity_workers}")
        return errors

    def warnings(self) -> list[str]:
        """Return list of non-fatal configuration warnings."""
        warns: list[str] = []
        if self.question_threshold < 0.5:
            warns.append(
                f"SIMILARITY_THRESHOLD_QUESTION={self.question_threshold} is permissive. "
                "Expect many unrelated prompts to be paired."
            )
        if self.options_threshold == 0.0:
            warns.append(
                "SIMILARITY_THRESHOLD_OPTIONS=0 pairs questions on prompt similarity alone."
            )
        return warns


def get_settings() -> Settings:
    """Create Settings from current environment."""
    return Settings()
