"""Tests for toolhub configuration."""

import os
import pytest
from pathlib import Path


class TestConfig:
    def test_defaults(self):
        from toolhub.config import Config
        assert Config.SERVER_NAME == "toolhub"
        assert Config.SERVER_VERSION == "1.0.0"
        assert Config.PROTOCOL_VERSION == "2025-06-18"
        assert Config.HTTP_TIMEOUT > 0
        assert Config.NOMINATIM_URL.startswith("https://")

    def test_toolhub_dir_default(self):
        from toolhub.config import Config
        # Default should be ~/.toolhub (unless overridden by env)
        assert "toolhub" in str(Config.TOOLHUB_DIR).lower() or "TOOLHUB_DATA_DIR" in os.environ

    def test_ensure_dirs(self, tmp_toolhub_dir):
        from toolhub.config import Config
        Config.ensure_dirs()
        assert Config.TOOLHUB_DIR.exists()
        assert Config.LOG_DIR.exists()

    def test_config_env_loading(self, tmp_path, monkeypatch):
        """Values from config.env fill in env vars that are not already set."""
        from toolhub import config

        home = tmp_path / "home"
        (home / ".toolhub").mkdir(parents=True)
        (home / ".toolhub" / "config.env").write_text(
            "# Comment line\n"
            "TOOLHUB_TEST_VAR=hello_world\n"
            "\n"
            "TOOLHUB_TEST_QUOTED=\"quoted value\"\n"
            "TOOLHUB_TEST_PRESET=from_file\n"
        )
        monkeypatch.setattr(Path, "home", classmethod(lambda cls: home))
        monkeypatch.delenv("TOOLHUB_TEST_VAR", raising=False)
        monkeypatch.delenv("TOOLHUB_TEST_QUOTED", raising=False)
        monkeypatch.setenv("TOOLHUB_TEST_PRESET", "from_env")

        config._load_config_env()

        assert os.environ.get("TOOLHUB_TEST_VAR") == "hello_world"
        assert os.environ.get("TOOLHUB_TEST_QUOTED") == "quoted value"
        assert os.environ.get("TOOLHUB_TEST_PRESET") == "from_env"

        # Cleanup
        os.environ.pop("TOOLHUB_TEST_VAR", None)
        os.environ.pop("TOOLHUB_TEST_QUOTED", None)


class TestHFToken:
    def test_env_var_wins(self, tmp_toolhub_dir, monkeypatch):
        from toolhub.config import Config
        (tmp_toolhub_dir / "huggingface_token").write_text("hf_from_file\n")
        monkeypatch.setenv("HF_TOKEN", "hf_from_env")
        assert Config.load_hf_token() == "hf_from_env"

    def test_token_file(self, tmp_toolhub_dir, monkeypatch):
        from toolhub.config import Config
        (tmp_toolhub_dir / "huggingface_token").write_text("  hf_from_file\n")
        monkeypatch.delenv("HF_TOKEN", raising=False)
        assert Config.load_hf_token() == "hf_from_file"

    def test_no_token(self, tmp_toolhub_dir, monkeypatch):
        from toolhub.config import Config
        monkeypatch.delenv("HF_TOKEN", raising=False)
        assert Config.load_hf_token() == ""


class TestLogging:
    def test_logs_written_under_data_dir(self, tmp_toolhub_dir):
        from toolhub.server.logger import get_logger
        log = get_logger("test")
        log.info("hello from the test")
        log.error("something broke")
        for handler in log.parent.handlers:
            handler.flush()

        main_log = (tmp_toolhub_dir / "logs" / "toolhub.log").read_text()
        error_log = (tmp_toolhub_dir / "logs" / "toolhub-errors.log").read_text()
        assert "[toolhub.test] hello from the test" in main_log
        assert "something broke" in error_log
        assert "hello from the test" not in error_log

    def test_reconfigure_follows_config(self, tmp_toolhub_dir, tmp_path):
        from toolhub.config import Config
        from toolhub.server.logger import configure_logging, get_logger

        Config.LOG_FILE = tmp_path / "other.log"
        Config.ERROR_LOG = tmp_path / "other-errors.log"
        configure_logging()
        get_logger("test").warning("moved")
        for handler in get_logger("test").parent.handlers:
            handler.flush()
        assert "moved" in (tmp_path / "other.log").read_text()
