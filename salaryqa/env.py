import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

_TRUE_VALUES = {"1", "true", "yes", "on"}


def load_env() -> None:
    """Load .env from project root if present.
    Existing environment variables win over values in the file.
    """
    env_path = Path.cwd() / ".env"
    if not env_path.exists():
        return
    load_dotenv(dotenv_path=env_path, override=False)


@dataclass(frozen=True)
class Settings:
    db_path: Path
    log_level: str
    log_dir: Path
    log_to_file: bool
    batch_limit: int


def get_settings() -> Settings:
    """Build settings from SALARYQA_* environment variables."""
    return Settings(
        db_path=Path(os.getenv("SALARYQA_DB_PATH", "data/salaries.db")),
        log_level=os.getenv("SALARYQA_LOG_LEVEL", "INFO"),
        log_dir=Path(os.getenv("SALARYQA_LOG_DIR", "logs")),
        log_to_file=os.getenv("SALARYQA_LOG_TO_FILE", "true").strip().lower() in _TRUE_VALUES,
        batch_limit=int(os.getenv("SALARYQA_BATCH_LIMIT", "100")),
    )
