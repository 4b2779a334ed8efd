"""Tests for settings loading and the published guidelines."""

import tempfile
from pathlib import Path

import yaml

from strikeguard.config import GUIDELINES, Settings, get_guidelines, load_settings


def test_defaults(monkeypatch):
    monkeypatch.delenv("STRIKEGUARD_LOG_LEVEL", raising=False)
    monkeypatch.delenv("STRIKEGUARD_MAX_CONTENT_LENGTH", raising=False)
    with tempfile.TemporaryDirectory() as tmpdir:
        monkeypatch.setenv("STRIKEGUARD_HOME", tmpdir)
        settings = load_settings()
        assert settings.data_dir == Path(tmpdir)
        assert settings.users_dir == Path(tmpdir) / "users"
        assert settings.strike_cap == 3.0
        assert settings.recidivism_threshold == 3
        assert settings.thresholds.restriction == 6.0
        assert settings.windows.suspension_days == 7


def test_yaml_settings(monkeypatch):
    monkeypatch.delenv("STRIKEGUARD_MAX_CONTENT_LENGTH", raising=False)
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "settings.yaml"
        path.write_text(
            yaml.dump(
                {
                    "data_dir": tmpdir,
                    "max_content_length": 500,
                    "strike_cap": 4,
                    "thresholds": {"suspension": 12},
                    "expiry_days": {"restriction": 1},
                    "catalog": "rules.yaml",
                }
            )
        )
        settings = load_settings(path)
        assert settings.max_content_length == 500
        assert settings.strike_cap == 4.0
        assert settings.thresholds.suspension == 12.0
        assert settings.thresholds.warning == 3.0
        assert settings.windows.restriction_days == 1
        assert settings.windows.suspension_days == 7
        assert settings.catalog_path == "rules.yaml"


def test_settings_file_in_home_is_picked_up(monkeypatch):
    monkeypatch.delenv("STRIKEGUARD_LOG_LEVEL", raising=False)
    with tempfile.TemporaryDirectory() as tmpdir:
        monkeypatch.setenv("STRIKEGUARD_HOME", tmpdir)
        (Path(tmpdir) / "settings.yaml").write_text("log_level: DEBUG\n")
        assert load_settings().log_level == "DEBUG"


def test_env_overrides_file(monkeypatch):
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "settings.yaml"
        path.write_text("max_content_length: 500\n")
        monkeypatch.setenv("STRIKEGUARD_MAX_CONTENT_LENGTH", "42")
        assert load_settings(path).max_content_length == 42


def test_settings_dataclass_defaults():
    assert Settings().max_content_length == 20_000


def test_guidelines_copy_is_independent():
    g = get_guidelines()
    g["rules"].append("extra")
    assert "extra" not in GUIDELINES["rules"]
    assert g["title"] == "Community Guidelines"
    assert any("6+ points" in c for c in g["consequences"])


def test_home_env_overrides_file_data_dir(monkeypatch):
    with tempfile.TemporaryDirectory() as tmpdir:
        path = Path(tmpdir) / "settings.yaml"
        path.write_text(yaml.dump({"data_dir": str(Path(tmpdir) / "from-file")}))
        monkeypatch.setenv("STRIKEGUARD_HOME", str(Path(tmpdir) / "from-env"))
        assert load_settings(path).data_dir == Path(tmpdir) / "from-env"


def test_explicit_data_dir_finds_its_settings_and_wins(monkeypatch):
    monkeypatch.delenv("STRIKEGUARD_LOG_LEVEL", raising=False)
    with tempfile.TemporaryDirectory() as home, tempfile.TemporaryDirectory() as data_dir:
        monkeypatch.setenv("STRIKEGUARD_HOME", home)
        (Path(home) / "settings.yaml").write_text("log_level: ERROR\n")
        (Path(data_dir) / "settings.yaml").write_text(yaml.dump({"log_level": "DEBUG", "data_dir": home}))

        settings = load_settings(data_dir=data_dir)
        assert settings.log_level == "DEBUG"
        assert settings.data_dir == Path(data_dir)
