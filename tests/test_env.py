"""
Tests for environment loading and settings.
"""

from pathlib import Path

from salaryqa.env import get_settings, load_env


class TestSettings:
    """Test settings resolution."""

    def test_defaults(self, monkeypatch):
        for name in ("SALARYQA_DB_PATH", "SALARYQA_LOG_LEVEL", "SALARYQA_LOG_DIR", "SALARYQA_BATCH_LIMIT"):
            monkeypatch.delenv(name, raising=False)
        monkeypatch.setenv("SALARYQA_LOG_TO_FILE", "true")

        settings = get_settings()

        assert settings.db_path == Path("data/salaries.db")
        assert settings.log_level == "INFO"
        assert settings.log_dir == Path("logs")
        assert settings.log_to_file is True
        assert settings.batch_limit == 100

    def test_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("SALARYQA_DB_PATH", str(tmp_path / "x.db"))
        monkeypatch.setenv("SALARYQA_LOG_TO_FILE", "0")
        monkeypatch.setenv("SALARYQA_BATCH_LIMIT", "25")

        settings = get_settings()

        assert settings.db_path == tmp_path / "x.db"
        assert settings.log_to_file is False
        assert settings.batch_limit == 25


class TestLoadEnv:
    """Test .env loading."""

    def test_loads_dotenv_file(self, monkeypatch, tmp_path):
        (tmp_path / ".env").write_text("SALARYQA_BATCH_LIMIT=7\n")
        monkeypatch.chdir(tmp_path)
        # Record the original value so teardown removes what load_env sets
        monkeypatch.setenv("SALARYQA_BATCH_LIMIT", "0")
        monkeypatch.delenv("SALARYQA_BATCH_LIMIT")

        load_env()

        assert get_settings().batch_limit == 7

    def test_environment_wins(self, monkeypatch, tmp_path):
        (tmp_path / ".env").write_text("SALARYQA_BATCH_LIMIT=7\n")
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("SALARYQA_BATCH_LIMIT", "50")

        load_env()

        assert get_settings().batch_limit == 50

    def test_missing_file_is_fine(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)

        load_env()
