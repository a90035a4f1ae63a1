"""Command-line front end for listing and solving encounters."""
from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Dict, Sequence

from skirmish.core.rng import RNG
from skirmish.core.types import Role
from skirmish.data.errors import DataError
from skirmish.data.repositories import EncountersRepository
from skirmish.services.errors import EncounterValidationError, FactoryError
from skirmish.services.factories import create_encounter_state
from skirmish.services.solver import Solver

from .config import load_config, save_config
from .render import render_heading, render_result

EXIT_OK = 0
EXIT_INPUT_ERROR = 2

_FLEE_CHOICES: Dict[str, Dict[Role, bool]] = {
    "none": {"initiator": False, "defender": False},
    "initiator": {"initiator": True, "defender": False},
    "defender": {"initiator": False, "defender": True},
    "both": {"initiator": True, "defender": True},
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="skirmish", description="Solve party-versus-party encounters.")
    parser.add_argument("--definitions", type=Path, default=None, help="Directory holding encounters.json")
    parser.add_argument("--config", type=Path, default=None, help="Path to a JSON config file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("list", help="List the available encounters")

    solve = commands.add_parser("solve", help="Find the best line of play for the initiating party")
    solve.add_argument("encounter", help="Encounter id, see 'skirmish list'")
    solve.add_argument("--depth", type=int, default=None, help="Maximum search depth in plies")
    solve.add_argument("--no-prune", action="store_true", help="Disable alpha-beta pruning")
    solve.add_argument("--deepen", action="store_true", help="Use iterative deepening up to --depth")
    solve.add_argument("--seed", type=int, default=0, help="Seed for generated participant names")
    solve.add_argument(
        "--flee",
        choices=sorted(_FLEE_CHOICES),
        default=None,
        help="Override which factions may flee",
    )

    settings = commands.add_parser("config", help="Show or update the saved solver defaults")
    settings.add_argument("--max-depth", type=int, default=None)
    settings.add_argument("--prune", choices=("on", "off"), default=None)
    settings.add_argument("--log-level", choices=("DEBUG", "INFO", "WARNING", "ERROR"), default=None)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI and return a process exit code."""
    args = build_parser().parse_args(argv)
    config = load_config(args.config)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, config["log_level"]),
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    repo = EncountersRepository(base_path=args.definitions)
    try:
        if args.command == "list":
            _list_encounters(repo)
            return EXIT_OK
        if args.command == "config":
            return _update_config(args, config)
        return _solve_encounter(args, config, repo)
    except (DataError, FactoryError, EncounterValidationError) as exc:
        print(f"Error: {exc}")
        return EXIT_INPUT_ERROR


def _list_encounters(repo: EncountersRepository) -> None:
    encounters = repo.all()
    render_heading("Encounters")
    for encounter in encounters:
        line = f"- {encounter.id}: {encounter.name}"
        if encounter.description:
            line += f" - {encounter.description}"
        print(line)


def _solve_encounter(args: argparse.Namespace, config: dict, repo: EncountersRepository) -> int:
    flee_override = _FLEE_CHOICES[args.flee] if args.flee else None
    state = create_encounter_state(args.encounter, repo, rng=RNG(args.seed), flee_override=flee_override)
    depth = args.depth if args.depth is not None else config["max_depth"]
    prune = config["prune"] and not args.no_prune
    solver = Solver(max_depth=depth, prune=prune)
    result = solver.deepen(state) if args.deepen else solver.solve(state)

    render_heading(repo.get(args.encounter).name)
    render_result(state, result)
    return EXIT_OK


def _update_config(args: argparse.Namespace, config: dict) -> int:
    changed = False
    if args.max_depth is not None:
        if args.max_depth < 1:
            print("Error: --max-depth must be at least 1.")
            return EXIT_INPUT_ERROR
        config["max_depth"] = args.max_depth
        changed = True
    if args.prune is not None:
        config["prune"] = args.prune == "on"
        changed = True
    if args.log_level is not None:
        config["log_level"] = args.log_level
        changed = True
    if changed:
        save_config(config, args.config)

    render_heading("Solver defaults")
    for key in sorted(config):
        print(f"- {key}: {config[key]}")
    return EXIT_OK
