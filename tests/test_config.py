from pathlib import Path

import pytest

from pledger.config import AppConfig, DisplayConfig, load_app_config
from pledger.errors import ConfigurationError


def test_missing_default_config_gives_defaults(tmp_path, monkeypatch) -> None:
    """No pledger.toml in the working directory means defaults."""
    monkeypatch.chdir(tmp_path)

    config = load_app_config()

    assert config == AppConfig()
    assert config.display == DisplayConfig(mode="summary", tag_width=16, amount_width=10)


def test_default_config_file_in_current_directory(tmp_path, monkeypatch) -> None:
    """pledger.toml in the working directory is picked up."""
    (tmp_path / "pledger.toml").write_text(
        '[ledger]\ndirectory = "books"\n\n[display]\nmode = "json"\n',
        encoding="utf-8",
    )
    monkeypatch.chdir(tmp_path)

    config = load_app_config()

    assert config.ledger_directory == (tmp_path / "books").resolve()
    assert config.display.mode == "json"


def test_explicit_config_resolves_paths_relative_to_file(tmp_path) -> None:
    """Relative directories resolve against the config file location."""
    conf_dir = tmp_path / "conf"
    conf_dir.mkdir()
    path = conf_dir / "custom.toml"
    path.write_text(
        "[ledger]\n"
        'directory = "../ledgers"\n'
        "\n"
        "[display]\n"
        "tag_width = 20\n"
        "amount_width = 12\n"
        "\n"
        "[editor]\n"
        'command = "nano -w"\n',
        encoding="utf-8",
    )

    config = load_app_config(str(path))

    assert config.ledger_directory == (tmp_path / "ledgers").resolve()
    assert config.display == DisplayConfig(mode="summary", tag_width=20, amount_width=12)
    assert config.editor == "nano -w"


def test_explicit_config_must_exist(tmp_path) -> None:
    """An explicit --config path must exist."""
    with pytest.raises(ConfigurationError, match="Config file not found"):
        load_app_config(str(tmp_path / "missing.toml"))


def test_malformed_toml(tmp_path) -> None:
    """Invalid TOML is reported as a configuration error."""
    path = tmp_path / "bad.toml"
    path.write_text("[ledger\ndirectory = ", encoding="utf-8")

    with pytest.raises(ConfigurationError, match="Failed to parse TOML"):
        load_app_config(str(path))


@pytest.mark.parametrize(
    "body",
    [
        '[display]\nmode = "table"\n',
        "[display]\ntag_width = 0\n",
        '[display]\namount_width = "wide"\n',
        "[display]\ntag_width = true\n",
        'display = "json"\n',
    ],
)
def test_invalid_values(tmp_path, body) -> None:
    """Wrong types or values in known keys are rejected."""
    path = tmp_path / "pledger.toml"
    path.write_text(body, encoding="utf-8")

    with pytest.raises(ConfigurationError):
        load_app_config(str(Path(path)))
