"""Unit tests for config.py"""

import pytest

from lunor.config import Settings, load_config


def test_load_config_defaults():
    """Settings defaults apply when no config.yaml, env var, or override exists."""
    settings = load_config()
    assert settings.output_dir == "dist"
    assert settings.output_ext == ".tsx"
    assert settings.source_extensions == [".lnr", ".lunor"]
    assert settings.log_level == "WARNING"


def test_load_config_uses_env_output_dir(monkeypatch):
    """LUNOR_OUTPUT_DIR env var is picked up by load_config."""
    monkeypatch.setenv("LUNOR_OUTPUT_DIR", "build/components")
    assert load_config().output_dir == "build/components"


def test_load_config_env_overrides_config_yaml(tmp_path, monkeypatch):
    """LUNOR_OUTPUT_DIR takes precedence over config.yaml output_dir."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / "config.yaml").write_text("output_dir: from-yaml\n")
    monkeypatch.setenv("LUNOR_OUTPUT_DIR", "from-env")
    assert load_config().output_dir == "from-env"


def test_load_config_cli_overrides_env(monkeypatch):
    """A non-None CLI override beats the env var."""
    monkeypatch.setenv("LUNOR_OUTPUT_EXT", ".jsx")
    settings = load_config(overrides={"output_ext": ".tsx", "output_dir": None})
    assert settings.output_ext == ".tsx"
    assert settings.output_dir == "dist"


def test_load_config_yaml_values(tmp_path, monkeypatch):
    """config.yaml values are applied when nothing overrides them."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / "config.yaml").write_text("indent_width: 4\nrouter_module: wouter\n")
    settings = load_config()
    assert settings.indent_width == 4
    assert settings.router_module == "wouter"


def test_load_config_env_indent_width(monkeypatch):
    """LUNOR_INDENT_WIDTH env var is coerced to int."""
    monkeypatch.setenv("LUNOR_INDENT_WIDTH", "4")
    assert load_config().indent_width == 4


def test_load_config_env_write_sidecar(monkeypatch):
    """LUNOR_WRITE_SIDECAR env var is coerced to bool."""
    monkeypatch.setenv("LUNOR_WRITE_SIDECAR", "true")
    assert load_config().write_sidecar is True


def test_load_config_env_source_extensions(monkeypatch):
    """A comma-separated LUNOR_SOURCE_EXTENSIONS is split and dotted."""
    monkeypatch.setenv("LUNOR_SOURCE_EXTENSIONS", "lnr, .view")
    assert load_config().source_extensions == [".lnr", ".view"]


def test_load_config_log_level_case_insensitive(monkeypatch):
    """LUNOR_LOG_LEVEL is upper-cased before validation."""
    monkeypatch.setenv("LUNOR_LOG_LEVEL", "debug")
    assert load_config().log_level == "DEBUG"


def test_load_config_invalid_yaml(tmp_path, monkeypatch):
    """load_config raises ValueError when config.yaml contains invalid YAML."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / "config.yaml").write_text("key: [unclosed\n")
    with pytest.raises(ValueError, match="Invalid config.yaml"):
        load_config()


def test_load_config_yaml_not_a_mapping(tmp_path, monkeypatch):
    """A config.yaml that is not a mapping is rejected."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / "config.yaml").write_text("- a\n- b\n")
    with pytest.raises(ValueError, match="expected a mapping"):
        load_config()


@pytest.mark.parametrize("overrides", [{"output_ext": ".vue"}, {"indent_width": 0}, {"log_level": "LOUD"}])
def test_load_config_invalid_values(overrides):
    """Out-of-range values raise ValueError."""
    with pytest.raises(ValueError, match="Invalid configuration"):
        load_config(overrides=overrides)


def test_settings_list_extensions_dotted():
    """List-valued source_extensions also gain a leading dot."""
    assert Settings(source_extensions=["lnr"]).source_extensions == [".lnr"]
