# trainer_calc/services/matchup.py
from __future__ import annotations

import logging
from typing import List

from ..models.matchup import (
    AttackDirectionResult,
    CombatantConfig,
    FieldConfig,
    MatchupResult,
    MoveResult,
    PokemonSummary,
)
from .damage_engine import DamageEngine, EngineCombatant, Generation
from .result_formatter import format_hit

log = logging.getLogger(__name__)

def summarize(mon: EngineCombatant) -> PokemonSummary:
    return PokemonSummary(
        name=mon.name,
        level=mon.level,
        ability=mon.ability or "N/A",
        item=mon.item or "N/A",
    )

def attack_direction(
    engine: DamageEngine,
    gen: Generation,
    attacker: EngineCombatant,
    defender: EngineCombatant,
    moves: List[str],
    field: FieldConfig,
    attacker_slot: int,
) -> AttackDirectionResult:
    atk_summary, def_summary = summarize(attacker), summarize(defender)
    if not moves:
        return AttackDirectionResult(
            attacker=atk_summary,
            defender=def_summary,
            moves=[],
            message=f"{attacker.name} has no moves to calculate.",
        )

    env = engine.field(field.directional(attacker_slot))
    results = []
    for move_name in moves:
        results.append(MoveResult(
            move_name=move_name,
            normal_hit=format_hit(engine, gen, attacker, defender, move_name, env, False),
            critical_hit=format_hit(engine, gen, attacker, defender, move_name, env, True),
        ))
    return AttackDirectionResult(attacker=atk_summary, defender=def_summary, moves=results)

def compute_matchup(
    engine: DamageEngine,
    generation: int,
    config1: CombatantConfig,
    config2: CombatantConfig,
    field: FieldConfig | None = None,
) -> MatchupResult:
    """Both attack directions of config1 vs config2, normal and critical hit per move."""
    field = field or FieldConfig()
    gen = engine.generation(generation)
    mon1 = engine.pokemon(gen, config1.name, config1.to_engine_options())
    mon2 = engine.pokemon(gen, config2.name, config2.to_engine_options())
    log.info("Calculating %s vs %s (gen %d)", mon1.name, mon2.name, gen.num)

    return MatchupResult(
        generation=gen.num,
        pokemon1=summarize(mon1),
        pokemon2=summarize(mon2),
        pokemon1_attacking_pokemon2=attack_direction(engine, gen, mon1, mon2, config1.moves, field, 1),
        pokemon2_attacking_pokemon1=attack_direction(engine, gen, mon2, mon1, config2.moves, field, 2),
    )
