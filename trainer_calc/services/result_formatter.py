# trainer_calc/services/result_formatter.py
from __future__ import annotations

import logging

from ..errors import CalculationError
from ..models.matchup import HitResult
from .damage_engine import DamageEngine, EngineCombatant, EngineField, Generation

log = logging.getLogger(__name__)

def damage_percent(damage: int, max_hp: int) -> float:
    """Share of max HP with one decimal, truncated: 81 of 402 -> 20.1."""
    return (damage * 1000) // max_hp / 10

def _empty_hit(ko_chance: str, description: str) -> HitResult:
    return HitResult((0, 0), (0, 0), ko_chance, description)

def format_hit(
    engine: DamageEngine,
    gen: Generation,
    attacker: EngineCombatant,
    defender: EngineCombatant,
    move_name: str,
    field: EngineField,
    is_crit: bool,
) -> HitResult:
    """
    One normal or critical hit as a HitResult. Status moves skip the engine;
    engine failures become a zero-damage hit instead of propagating.
    """
    try:
        move = engine.move(gen, move_name, is_crit=is_crit)
    except CalculationError as e:
        log.warning("Move %s could not be built: %s", move_name, e)
        return _empty_hit("Calculation Error / No effect", f"{move_name} could not be calculated: {e}")

    if move.bp == 0:
        if is_crit:
            return _empty_hit("No damaging effect", f"{move.name} is a non-damaging move, so it cannot critically hit.")
        return _empty_hit("No damaging effect", f"{move.name} is a non-damaging move.")

    try:
        result = engine.calculate(gen, attacker, defender, move, field)
    except CalculationError as e:
        log.warning("%s vs %s with %s failed: %s", attacker.name, defender.name, move.name, e)
        return _empty_hit("Calculation Error / No effect", f"{move.name} could not be calculated: {e}")

    dmg_min, dmg_max = result.damage_range
    if dmg_max == 0:
        return _empty_hit("Immune / No damaging effect", f"{move.name} had no damaging effect on {defender.name}.")

    max_hp = defender.max_hp()
    return HitResult(
        damage_range=(dmg_min, dmg_max),
        percentage_range=(damage_percent(dmg_min, max_hp), damage_percent(dmg_max, max_hp)),
        ko_chance=result.ko_chance,
        description=result.description,
    )
