import json
from pathlib import Path

from skirmish.presentation.cli import config as cli_config


def test_load_config_missing_file_returns_defaults(tmp_path: Path) -> None:
    assert cli_config.load_config(tmp_path / "missing.json") == cli_config.default_config()


def test_save_and_load_round_trip(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "config.json"
    cli_config.save_config({"max_depth": 5, "prune": False, "log_level": "info"}, path)

    assert cli_config.load_config(path) == {"max_depth": 5, "prune": False, "log_level": "INFO"}


def test_invalid_values_fall_back_to_defaults(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps({"max_depth": 0, "prune": "yes", "log_level": "LOUD", "colour": True}),
        encoding="utf-8",
    )

    assert cli_config.load_config(path) == cli_config.default_config()


def test_boolean_depth_is_ignored() -> None:
    assert cli_config.normalize_config({"max_depth": True})["max_depth"] == 8


def test_unreadable_config_logs_and_returns_defaults(tmp_path: Path, caplog) -> None:
    path = tmp_path / "config.json"
    path.write_text("{ broken", encoding="utf-8")

    assert cli_config.load_config(path) == cli_config.default_config()
    assert "Ignoring unreadable config" in caplog.text


def test_non_object_config_returns_defaults() -> None:
    assert cli_config.normalize_config(["max_depth", 3]) == cli_config.default_config()


def test_default_config_path_env_override(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv(cli_config.CONFIG_ENV_VAR, str(tmp_path / "custom.json"))
    assert cli_config.get_default_config_path() == tmp_path / "custom.json"


def test_default_config_path_under_user_dir(monkeypatch) -> None:
    monkeypatch.delenv(cli_config.CONFIG_ENV_VAR, raising=False)
    path = cli_config.get_default_config_path()
    assert path.name == "config.json"
    assert path.parent == cli_config.get_user_data_dir()
