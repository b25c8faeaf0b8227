"""Tests for config file parsing."""

from unittest.mock import patch

from orgcal.config import Config, load_config


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, tmp_path):
        with patch("orgcal.config.CONFIG_FILE", tmp_path / "missing.conf"):
            config = load_config()
        assert config == Config()

    def test_parses_values(self, tmp_path):
        config_file = tmp_path / "orgcal.conf"
        config_file.write_text(
            "# orgcal settings\n"
            'ORG_DIR="~/org"  # where notes live\n'
            "IGNORE_BEFORE_DAYS=30\n"
            "ignore_after_days = 90 # inline comment\n"
            "TODO_KEYWORDS=TODO, NEXT, DONE\n"
            "KEEP_GOING=true\n"
            "OUTPUT='/tmp/events.json'\n"
        )

        with patch("orgcal.config.CONFIG_FILE", config_file):
            config = load_config()

        assert config.org_dir == "~/org"
        assert config.ignore_before_days == 30
        assert config.ignore_after_days == 90
        assert config.todo_keywords == ["TODO", "NEXT", "DONE"]
        assert config.keep_going is True
        assert config.output == "/tmp/events.json"

    def test_invalid_integer_keeps_default(self, tmp_path, caplog):
        config_file = tmp_path / "orgcal.conf"
        config_file.write_text("IGNORE_BEFORE_DAYS=soon\n")

        with patch("orgcal.config.CONFIG_FILE", config_file):
            config = load_config()

        assert config.ignore_before_days == 0
        assert "IGNORE_BEFORE_DAYS" in caplog.text

    def test_skips_lines_without_equals(self, tmp_path):
        config_file = tmp_path / "orgcal.conf"
        config_file.write_text("just some text\nORG_DIR=/notes\n")

        with patch("orgcal.config.CONFIG_FILE", config_file):
            config = load_config()

        assert config.org_dir == "/notes"
