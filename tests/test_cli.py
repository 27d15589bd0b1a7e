# Area: Shared Tests
"""Tests for CLI argument handling."""

import logging

import pytest

from quiz_judge._config import ENV_MAPPINGS
from quiz_judge.cli import build_config, main, parse_args


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for key in list(ENV_MAPPINGS) + ["DEMO_MODE"]:
        monkeypatch.delenv(key, raising=False)
    # Keep load_dotenv() away from any .env in the working tree
    monkeypatch.chdir(tmp_path)


class TestParseArgs:
    """Tests for parse_args()."""

    def test_defaults(self):
        """Test that parse_args leaves unset options as None."""
        args = parse_args([])
        assert args.demo is False
        assert args.name is None
        assert args.store is None

    def test_all_options(self):
        """Test that every option is parsed."""
        args = parse_args([
            "--demo", "--name", "Alice", "--store", "sqlite",
            "--scorer", "mock", "--questions", "bank.json",
        ])
        assert args.demo is True
        assert args.name == "Alice"
        assert args.store == "sqlite"
        assert args.scorer == "mock"
        assert args.questions == "bank.json"

    def test_unknown_store_rejected(self):
        """Test that an unknown store name exits argparse."""
        with pytest.raises(SystemExit):
            parse_args(["--store", "redis"])


class TestBuildConfig:
    """Tests for build_config()."""

    def test_cli_overrides(self):
        """Test that command-line options override config values."""
        config = build_config(parse_args(["--store", "memory", "--scorer", "mock"]))
        assert config["store"] == "memory"
        assert config["scorer"] == "mock"

    def test_demo_flag(self):
        """Test that --demo switches to offline components."""
        config = build_config(parse_args(["--demo", "--scorer", "gemini"]))
        assert config["scorer"] == "demo"
        assert config["store"] == "memory"

    def test_demo_mode_from_environment(self, monkeypatch):
        """Test that demo mode can be enabled from the environment."""
        monkeypatch.setenv("DEMO_MODE", "1")
        assert build_config(parse_args([]))["scorer"] == "demo"

    def test_questions_path(self):
        """Test that --questions sets the question file path."""
        config = build_config(parse_args(["--questions", "bank.json"]))
        assert config["questions_path"] == "bank.json"


class TestMain:
    """Tests for main() error exits."""

    @pytest.fixture(autouse=True)
    def reset_logging(self):
        yield
        pkg_logger = logging.getLogger("quiz_judge")
        for handler in list(pkg_logger.handlers):
            handler.close()
        pkg_logger.handlers.clear()
        pkg_logger.propagate = True

    def test_bad_environment_exits_with_error(self, monkeypatch, capsys):
        """Test that an invalid environment value exits with code 1."""
        monkeypatch.setenv("QUIZ_MAX_ATTEMPTS", "lots")
        assert main([]) == 1
        assert "QUIZ_MAX_ATTEMPTS" in capsys.readouterr().err

    def test_missing_question_file_exits_with_error(self, capsys):
        """Test that a missing question file exits with code 1."""
        assert main(["--demo", "--questions", "missing.json", "--name", "Al"]) == 1
        assert "missing.json" in capsys.readouterr().err
