"""Tests for configuration loading."""

from datetime import date
from pathlib import Path

import pytest

from toki.config import Config, config_file, default_data_dir, load_config, toki_home


@pytest.fixture
def home(tmp_path, monkeypatch):
    monkeypatch.setenv("TOKI_HOME", str(tmp_path))
    return tmp_path


def write_conf(home: Path, text: str) -> Path:
    path = home / "config" / "toki.conf"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)
    return path


class TestPaths:
    def test_home_from_env(self, home):
        assert toki_home() == home
        assert config_file() == home / "config" / "toki.conf"
        assert default_data_dir() == home / "data" / "database"

    def test_default_home(self, monkeypatch):
        monkeypatch.delenv("TOKI_HOME", raising=False)
        assert toki_home() == Path.home() / "toki"


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, home):
        config = load_config()
        assert config == Config()
        assert config.upcoming_days == 7
        assert config.watch_interval == 60

    def test_reads_keys(self, home):
        write_conf(
            home,
            "# Toki settings\n"
            'DATA_DIR="~/agenda data"  # quoted\n'
            "UPCOMING_DAYS=14 # two weeks\n"
            "TIMEZONE='Asia/Jakarta'\n"
            "WATCH_INTERVAL = 5\n"
            "not a setting\n",
        )
        config = load_config()
        assert config.data_dir == "~/agenda data"
        assert config.upcoming_days == 14
        assert config.timezone == "Asia/Jakarta"
        assert config.watch_interval == 5

    def test_bad_integer_keeps_default(self, home):
        write_conf(home, "UPCOMING_DAYS=soon\n")
        assert load_config().upcoming_days == 7

    def test_explicit_path(self, tmp_path):
        path = tmp_path / "other.conf"
        path.write_text("UPCOMING_DAYS=3\n")
        assert load_config(path).upcoming_days == 3


class TestConfig:
    def test_data_path_default(self, home):
        assert Config().data_path == home / "data" / "database"

    def test_data_path_expands_user(self):
        assert Config(data_dir="~/x").data_path == Path.home() / "x"

    def test_today_local(self):
        assert Config().today() == date.today()

    def test_today_with_unknown_timezone_falls_back(self):
        assert Config(timezone="Not/AZone").today() == date.today()

    def test_today_with_timezone(self):
        assert isinstance(Config(timezone="UTC").today(), date)
