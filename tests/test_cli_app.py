import json
from pathlib import Path

from skirmish.presentation.cli.app import EXIT_INPUT_ERROR, EXIT_OK, build_parser, main


def _run(argv: list[str], tmp_path: Path) -> int:
    return main(["--config", str(tmp_path / "config.json"), *argv])


def test_list_shows_bundled_encounters(capsys, tmp_path: Path) -> None:
    assert _run(["list"], tmp_path) == EXIT_OK
    output = capsys.readouterr().out

    assert "=== Encounters ===" in output
    assert "- ambush_at_the_ford: Ambush at the Ford" in output
    assert "- crypt_warden: The Crypt Warden" in output


def test_solve_prints_verdict_and_timeline(capsys, tmp_path: Path) -> None:
    assert _run(["solve", "ambush_at_the_ford", "--depth", "5"], tmp_path) == EXIT_OK
    output = capsys.readouterr().out

    assert "TL;DR: The initiating party wins with a score of 10." in output
    assert "Turn 1 (attacking side):" in output
    assert "has given up on being alive" in output


def test_solve_flee_variant(capsys, tmp_path: Path) -> None:
    assert _run(["solve", "ambush_at_the_ford_flee", "--deepen", "--depth", "6"], tmp_path) == EXIT_OK
    output = capsys.readouterr().out

    assert "TL;DR: The defending party runs away with a score of 2." in output
    assert "(may flee)" in output


def test_solve_uses_config_depth(capsys, tmp_path: Path) -> None:
    (tmp_path / "config.json").write_text(json.dumps({"max_depth": 1}), encoding="utf-8")

    assert _run(["solve", "ambush_at_the_ford"], tmp_path) == EXIT_OK
    assert "Anything could happen" in capsys.readouterr().out


def test_unknown_encounter_is_an_input_error(capsys, tmp_path: Path) -> None:
    assert _run(["solve", "nowhere"], tmp_path) == EXIT_INPUT_ERROR
    assert "Error: Encounter 'nowhere' not found." in capsys.readouterr().out


def test_missing_definitions_is_an_input_error(capsys, tmp_path: Path) -> None:
    assert _run(["--definitions", str(tmp_path), "list"], tmp_path) == EXIT_INPUT_ERROR
    output = capsys.readouterr().out
    assert "Error: Definition file not found" in output
    assert "=== Encounters ===" not in output


def test_parser_solve_defaults() -> None:
    args = build_parser().parse_args(["solve", "crypt_warden"])

    assert args.depth is None
    assert args.seed == 0
    assert not args.no_prune
    assert not args.deepen


def test_flee_override_changes_the_verdict(capsys, tmp_path: Path) -> None:
    assert _run(["solve", "ambush_at_the_ford_flee", "--depth", "6", "--flee", "none"], tmp_path) == EXIT_OK
    output = capsys.readouterr().out

    assert "TL;DR: The initiating party wins with a score of 10." in output
    assert "(may flee)" not in output


def test_config_command_saves_and_shows_defaults(capsys, tmp_path: Path) -> None:
    assert _run(["config", "--max-depth", "4", "--prune", "off"], tmp_path) == EXIT_OK
    output = capsys.readouterr().out

    assert "- max_depth: 4" in output
    assert "- prune: False" in output
    saved = json.loads((tmp_path / "config.json").read_text(encoding="utf-8"))
    assert saved == {"log_level": "WARNING", "max_depth": 4, "prune": False}


def test_config_command_rejects_bad_depth(capsys, tmp_path: Path) -> None:
    assert _run(["config", "--max-depth", "0"], tmp_path) == EXIT_INPUT_ERROR
    assert not (tmp_path / "config.json").exists()
