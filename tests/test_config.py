"""Unit tests for loading ReaderSettings from YAML."""

from pathlib import Path

import pytest

from lazy_resources.config import load_settings
from lazy_resources.exceptions import ConfigurationError
from lazy_resources.models import ReaderSettings


def write_settings(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "resources.yaml"
    path.write_text(content, encoding="utf-8")
    return path


class TestLoadSettings:
    """Tests for load_settings."""

    def test_full_file(self, tmp_path: Path):
        path = write_settings(
            tmp_path,
            """
packages:
  - myapp.texts
directories:
  - /srv/templates
exclude_patterns:
  - "tests*"
skip_suffixes: [".py", ".bak"]
encoding: latin-1
cache_mode: relaxed
audit_log: /var/log/resources.jsonl
""",
        )

        settings = load_settings(path)

        assert settings.packages == ["myapp.texts"]
        assert settings.directories == ["/srv/templates"]
        assert settings.exclude_patterns == ["tests*"]
        assert settings.skip_suffixes == {".py", ".bak"}
        assert settings.encoding == "latin-1"
        assert settings.cache_mode == "relaxed"
        assert settings.audit_log == "/var/log/resources.jsonl"

    def test_empty_file_gives_defaults(self, tmp_path: Path):
        """An empty document is the same as no settings at all."""
        settings = load_settings(write_settings(tmp_path, ""))

        assert settings == ReaderSettings()

    def test_relative_directories(self, tmp_path: Path):
        """Relative directories are resolved against the settings file."""
        path = write_settings(tmp_path, "directories:\n  - templates\n  - /abs/texts\n")

        settings = load_settings(path)

        assert settings.directories == [str(tmp_path / "templates"), "/abs/texts"]

    def test_accepts_string_path(self, tmp_path: Path):
        path = write_settings(tmp_path, "cache_mode: relaxed\n")

        assert load_settings(str(path)).cache_mode == "relaxed"

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ConfigurationError, match="Cannot read settings file"):
            load_settings(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path: Path):
        path = write_settings(tmp_path, "packages: [unclosed\n")

        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            load_settings(path)

    def test_not_a_mapping(self, tmp_path: Path):
        path = write_settings(tmp_path, "- myapp.texts\n")

        with pytest.raises(ConfigurationError, match="must be a YAML dictionary, got list"):
            load_settings(path)

    @pytest.mark.parametrize("key", ["packages", "directories", "exclude_patterns", "skip_suffixes"])
    def test_list_settings_must_be_lists(self, tmp_path: Path, key: str):
        path = write_settings(tmp_path, f"{key}: single-value\n")

        with pytest.raises(ConfigurationError, match=f"Setting '{key}' must be a list"):
            load_settings(path)

    @pytest.mark.parametrize(
        "content",
        ["encoding:\n", "encoding: 8\n", "cache_mode: [relaxed]\n", "audit_log: 42\n"],
    )
    def test_scalar_settings_must_be_strings(self, tmp_path: Path, content: str):
        path = write_settings(tmp_path, content)

        with pytest.raises(ConfigurationError, match="must be a string"):
            load_settings(path)

    def test_null_audit_log_is_allowed(self, tmp_path: Path):
        path = write_settings(tmp_path, "audit_log: null\n")

        assert load_settings(path).audit_log is None
