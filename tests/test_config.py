from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from critpath import config, exceptions
from critpath.config import ConfigSource

if TYPE_CHECKING:
    import pathlib


def _write_global(text: str) -> pathlib.Path:
    path = config.get_global_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)
    return path


# =============================================================================
# Defaults and models
# =============================================================================


def test_defaults_without_files() -> None:
    cfg = config.load_config()
    assert cfg.analysis.default_source == 0
    assert cfg.analysis.show_paths is True
    assert cfg.display.precision == 3
    assert cfg.display.color is None


def test_every_key_has_a_description() -> None:
    defaults = config.CritpathConfig.get_default().model_dump()
    keys = {f"{section}.{key}" for section, values in defaults.items() for key in values}
    assert keys == set(config.CONFIG_KEY_DESCRIPTIONS)


# =============================================================================
# Layering
# =============================================================================


def test_global_config_is_read() -> None:
    _write_global("display:\n  precision: 5\n")
    assert config.load_config().display.precision == 5


def test_local_overrides_global(isolated_config: pathlib.Path) -> None:
    _write_global("display:\n  precision: 5\n  color: false\n")
    (isolated_config / ".critpath.yaml").write_text("display:\n  precision: 1\n")

    cfg = config.load_config()

    assert cfg.display.precision == 1
    assert cfg.display.color is False


def test_env_overrides_local(
    isolated_config: pathlib.Path, tmp_path: pathlib.Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    (isolated_config / ".critpath.yaml").write_text("analysis:\n  default_source: 1\n")
    env_file = tmp_path / "env.yaml"
    env_file.write_text("analysis:\n  default_source: 2\n")
    monkeypatch.setenv(config.CONFIG_ENV_VAR, str(env_file))

    assert config.load_config().analysis.default_source == 2


def test_explicit_overrides_env(tmp_path: pathlib.Path, monkeypatch: pytest.MonkeyPatch) -> None:
    env_file = tmp_path / "env.yaml"
    env_file.write_text("analysis:\n  show_paths: false\n  default_source: 2\n")
    explicit = tmp_path / "explicit.yaml"
    explicit.write_text("analysis:\n  default_source: 3\n")
    monkeypatch.setenv(config.CONFIG_ENV_VAR, str(env_file))

    cfg = config.load_config(explicit)

    assert cfg.analysis.default_source == 3
    assert cfg.analysis.show_paths is False


def test_config_layers_lists_existing_files(
    isolated_config: pathlib.Path, tmp_path: pathlib.Path
) -> None:
    global_path = _write_global("{}\n")
    local_path = isolated_config / ".critpath.yaml"
    local_path.write_text("")
    explicit = tmp_path / "x.yaml"
    explicit.write_text("")

    layers = config.config_layers(explicit)

    assert layers == [
        (ConfigSource.GLOBAL, global_path),
        (ConfigSource.LOCAL, local_path),
        (ConfigSource.EXPLICIT, explicit),
    ]


def test_config_layers_skips_missing_optional_files() -> None:
    assert config.config_layers() == []


def test_missing_explicit_file_is_an_error(tmp_path: pathlib.Path) -> None:
    with pytest.raises(exceptions.ConfigError, match="Config file not found"):
        config.load_config(tmp_path / "missing.yaml")


def test_missing_env_file_is_an_error(
    tmp_path: pathlib.Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv(config.CONFIG_ENV_VAR, str(tmp_path / "missing.yaml"))
    with pytest.raises(exceptions.ConfigError, match="Config file not found"):
        config.load_config()


# =============================================================================
# Invalid files
# =============================================================================


@pytest.mark.parametrize(
    ("text", "match"),
    [
        pytest.param("display: [unclosed\n", "Invalid YAML", id="bad-yaml"),
        pytest.param("- a\n- b\n", "must be a mapping", id="not-mapping"),
        pytest.param("display:\n  precision: 12\n", "display.precision", id="out-of-range"),
        pytest.param("analysis:\n  unknown: 1\n", "analysis.unknown", id="unknown-key"),
        pytest.param("analysis:\n  default_source: -1\n", "default_source", id="negative"),
    ],
)
def test_invalid_config_raises(tmp_path: pathlib.Path, text: str, match: str) -> None:
    path = tmp_path / "bad.yaml"
    path.write_text(text)
    with pytest.raises(exceptions.ConfigError, match=match):
        config.load_config(path)


def test_empty_file_means_defaults(tmp_path: pathlib.Path) -> None:
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert config.load_config_file(path) == {}
    assert config.load_config(path) == config.CritpathConfig.get_default()


# =============================================================================
# deep_merge
# =============================================================================


def test_deep_merge_nested() -> None:
    base = {"a": {"x": 1, "y": 2}, "b": 1}
    merged = config.deep_merge(base, {"a": {"y": 3}, "c": 4})

    assert merged == {"a": {"x": 1, "y": 3}, "b": 1, "c": 4}
    assert base == {"a": {"x": 1, "y": 2}, "b": 1}


def test_deep_merge_replaces_non_dict_values() -> None:
    assert config.deep_merge({"a": {"x": 1}}, {"a": 5}) == {"a": 5}
