"""
Tests for configuration loading — hostcap.yml parsing and validation.
"""

import textwrap
from pathlib import Path

import pytest

from hostcap.core.config.loader import ConfigError, find_config_file, load_settings
from hostcap.core.models.settings import Settings


@pytest.fixture
def valid_config(tmp_path: Path) -> Path:
    """Create a valid hostcap.yml in a temp directory."""
    content = textwrap.dedent("""\
        log_level: info
        timeouts:
          probe: 5
          operation: 60
        disabled:
          init_systems: [upstart, sysvinit]
          package_managers: [macports]
    """)
    path = tmp_path / "hostcap.yml"
    path.write_text(content)
    return path


class TestLoadSettings:
    def test_valid(self, valid_config: Path):
        settings = load_settings(valid_config)
        assert settings.log_level == "INFO"
        assert settings.timeouts.probe == 5
        assert settings.timeouts.operation == 60
        assert settings.disabled.init_systems == ["upstart", "sysvinit"]
        assert settings.disabled.package_managers == ["macports"]

    def test_defaults_when_absent(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert load_settings() == Settings()

    def test_no_search(self):
        assert load_settings(search=False) == Settings()

    def test_empty_file(self, tmp_path: Path):
        path = tmp_path / "hostcap.yml"
        path.write_text("")
        assert load_settings(path) == Settings()

    def test_explicit_missing(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="not found"):
            load_settings(tmp_path / "nope.yml")

    def test_invalid_yaml(self, tmp_path: Path):
        path = tmp_path / "hostcap.yml"
        path.write_text("timeouts: [unclosed")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_settings(path)

    def test_not_a_mapping(self, tmp_path: Path):
        path = tmp_path / "hostcap.yml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_settings(path)

    def test_negative_timeout(self, tmp_path: Path):
        path = tmp_path / "hostcap.yml"
        path.write_text("timeouts:\n  probe: -1\n")
        with pytest.raises(ConfigError, match="Invalid configuration"):
            load_settings(path)

    def test_unknown_facility(self, tmp_path: Path):
        path = tmp_path / "hostcap.yml"
        path.write_text("disabled:\n  init_systems: [smf]\n")
        with pytest.raises(ConfigError, match="smf"):
            load_settings(path)

    def test_null_timeout_means_unlimited(self, tmp_path: Path):
        path = tmp_path / "hostcap.yml"
        path.write_text("timeouts:\n  operation: null\n")
        assert load_settings(path).timeouts.operation is None


class TestFindConfigFile:
    def test_walks_up(self, valid_config: Path):
        nested = valid_config.parent / "a" / "b"
        nested.mkdir(parents=True)
        assert find_config_file(nested) == valid_config.resolve()

    def test_not_found(self, tmp_path: Path):
        # tmp_path parents may contain a stray file on shared machines
        found = find_config_file(tmp_path)
        assert found is None or found.parent != tmp_path
