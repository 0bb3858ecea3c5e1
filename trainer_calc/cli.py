from __future__ import annotations
import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional

from trainer_calc.config import Settings
from trainer_calc.controllers.matchup_controller import MatchupController
from trainer_calc.db.base import make_engine, make_session_factory, session_scope
from trainer_calc.db.repository import count_presets, init_db, save_collection
from trainer_calc.errors import TrainerCalcError
from trainer_calc.parsing.showdown_parser import parse_showdown_text
from trainer_calc.services.damage_engine import SmogonCalcClient
from trainer_calc.services.dataset_index import DatasetIndex
from trainer_calc.utils.logging_setup import setup_logging

log = logging.getLogger(__name__)

def build_parser(settings: Settings) -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="trainer_calc", description="Two-way damage calculations with trainer sets.")
    p.add_argument("--sets-dir", default=settings.sets_dir, help="directory holding gen<N>.js setdex files")
    p.add_argument("--db-url", default=settings.db_url, help="database holding imported sets")
    p.add_argument("--source", choices=("files", "db"), default="files", help="where trainer sets are read from")
    p.add_argument("--service-url", default=settings.service_url, help="@smogon/calc bridge URL")
    p.add_argument("--log-level", default=settings.log_level)
    sub = p.add_subparsers(dest="command", required=True)

    calc = sub.add_parser("calc", help="calculate a matchup from a JSON options file ('-' for stdin)")
    calc.add_argument("options")
    calc.add_argument("--pokemon1-paste", help="Showdown export text for pokemon1")
    calc.add_argument("--pokemon2-paste", help="Showdown export text for pokemon2")

    sets = sub.add_parser("sets", help="list every set of a trainer")
    sets.add_argument("trainer")
    sets.add_argument("--generation", "-g", type=int, required=True)

    imp = sub.add_parser("import-sets", help="store setdex files in the database")
    imp.add_argument("--generation", "-g", type=int, action="append", dest="generations")
    return p

def _read_text(path: str) -> str:
    if path == "-":
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8") as f:
        return f.read()

def load_options(path: str, paste1: Optional[str] = None, paste2: Optional[str] = None) -> Dict[str, Any]:
    options = json.loads(_read_text(path))
    if not isinstance(options, dict):
        raise ValueError("options must be a JSON object")
    for key, paste in (("pokemon1", paste1), ("pokemon2", paste2)):
        if paste:
            # explicit JSON fields win over the paste
            options[key] = {**parse_showdown_text(_read_text(paste)), **(options.get(key) or {})}
    return options

def load_dataset(args, generations: Optional[List[int]] = None) -> DatasetIndex:
    if args.source == "db":
        return DatasetIndex.from_database(make_engine(args.db_url), generations)
    return DatasetIndex.from_directory(args.sets_dir, generations)

def _cmd_calc(args, settings: Settings) -> int:
    options = load_options(args.options, args.pokemon1_paste, args.pokemon2_paste)
    dataset = load_dataset(args)
    with SmogonCalcClient(args.service_url, timeout=settings.timeout) as engine:
        result = MatchupController(dataset, engine).calculate_damage(options)
    print(json.dumps(result, indent=2, ensure_ascii=False))
    return 0

def _cmd_sets(args, settings: Settings) -> int:
    dataset = load_dataset(args, [args.generation])
    controller = MatchupController(dataset)
    print(json.dumps(controller.get_trainer_pokemon_sets(args.generation, args.trainer), indent=2, ensure_ascii=False))
    return 0

def _cmd_import(args, settings: Settings) -> int:
    dataset = DatasetIndex.from_directory(args.sets_dir, args.generations)
    engine = make_engine(args.db_url)
    init_db(engine)
    with session_scope(make_session_factory(engine)) as s:
        for gen in dataset.generations():
            n = save_collection(s, gen, dataset.get_presets(gen))
            log.info("Stored %d sets for generation %d", n, gen)
        log.info("Database now holds %d sets", count_presets(s))
    return 0

COMMANDS = {"calc": _cmd_calc, "sets": _cmd_sets, "import-sets": _cmd_import}

def main(argv: Optional[List[str]] = None) -> int:
    settings = Settings.from_env()
    args = build_parser(settings).parse_args(argv)
    setup_logging(args.log_level)
    try:
        return COMMANDS[args.command](args, settings)
    except (TrainerCalcError, ValueError, OSError) as e:
        print(f"Error during calculation: {e}", file=sys.stderr)
        return 1
