"""Tests for vazhi.core.config – settings from YAML and the environment."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from vazhi.core.config import (
    DEFAULT_BASE_URL,
    DEFAULT_USER_ID,
    Settings,
    load_settings,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in ("VAZHI_BACKEND_URL", "VAZHI_USER_ID", "VAZHI_THEME"):
        monkeypatch.delenv(var, raising=False)


def _write_yaml(path: Path, data) -> Path:
    path.write_text(yaml.dump(data, default_flow_style=False), encoding="utf-8")
    return path


class TestDefaults:
    def test_missing_file(self, tmp_path: Path):
        s = load_settings(tmp_path / "nope.yaml")
        assert s == Settings()
        assert s.base_url == DEFAULT_BASE_URL
        assert s.user_id == DEFAULT_USER_ID
        assert s.theme == "dark"


class TestFile:
    def test_reads_values(self, tmp_path: Path):
        f = _write_yaml(tmp_path / "config.yaml", {"base_url": "http://api.test", "user_id": "ada"})
        s = load_settings(f)
        assert s.base_url == "http://api.test"
        assert s.user_id == "ada"

    def test_empty_file(self, tmp_path: Path):
        f = tmp_path / "config.yaml"
        f.write_text("", encoding="utf-8")
        assert load_settings(f) == Settings()

    def test_invalid_yaml(self, tmp_path: Path):
        f = tmp_path / "config.yaml"
        f.write_text("base_url: [unclosed", encoding="utf-8")
        assert load_settings(f) == Settings()

    def test_not_a_mapping(self, tmp_path: Path):
        f = _write_yaml(tmp_path / "config.yaml", ["a", "b"])
        assert load_settings(f) == Settings()

    def test_invalid_value_ignored(self, tmp_path: Path):
        f = _write_yaml(tmp_path / "config.yaml", {"user_id": 42, "theme": "light"})
        s = load_settings(f)
        assert s.user_id == DEFAULT_USER_ID
        assert s.theme == "light"

    def test_unknown_theme_falls_back(self, tmp_path: Path):
        f = _write_yaml(tmp_path / "config.yaml", {"theme": "neon"})
        assert load_settings(f).theme == "dark"


class TestEnvironment:
    def test_env_overrides_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        f = _write_yaml(tmp_path / "config.yaml", {"base_url": "http://file", "user_id": "file-user"})
        monkeypatch.setenv("VAZHI_BACKEND_URL", "http://env")
        s = load_settings(f)
        assert s.base_url == "http://env"
        assert s.user_id == "file-user"

    def test_blank_env_ignored(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("VAZHI_USER_ID", "   ")
        assert load_settings(tmp_path / "nope.yaml").user_id == DEFAULT_USER_ID

    def test_theme_from_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("VAZHI_THEME", "light")
        assert load_settings(tmp_path / "nope.yaml").theme == "light"
