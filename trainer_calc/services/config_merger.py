# trainer_calc/services/config_merger.py
from __future__ import annotations

from typing import Any, Mapping, Optional

from ..errors import InvalidTrainerReference, MissingPokemonName
from ..models.matchup import CombatantConfig
from ..models.preset import Preset
from ..utils.stats import complete_evs, complete_ivs
from .trainer_sets import TrainerSetResolver

DEFAULT_LEVEL = 100
DEFAULT_NATURE = "Serious"

def apply_overrides(raw: Mapping[str, Any]) -> dict:
    """
    Defaults with the explicitly supplied fields on top. Falsy scalars count
    as "not supplied"; partial ivs/evs are merged stat by stat.
    """
    return {
        "name": raw.get("name"),
        "level": raw.get("level") or DEFAULT_LEVEL,
        "ability": raw.get("ability"),
        "item": raw.get("item"),
        "nature": raw.get("nature") or DEFAULT_NATURE,
        "ivs": complete_ivs(raw.get("ivs")),
        "evs": complete_evs(raw.get("evs")),
        "boosts": {k: v for k, v in (raw.get("boosts") or {}).items() if v is not None},
        "cur_hp": raw.get("curHP"),
        "status": raw.get("status") or "",
        "is_dynamaxed": bool(raw.get("isDynamaxed") or False),
        "moves": list(raw.get("moves") or []),
    }

def apply_preset(opts: dict, species_name: str, preset: Preset, raw: Mapping[str, Any]) -> dict:
    """
    Layers a trainer preset over `opts`:
    - name becomes the species;
    - level/ability/item/nature come from the preset when it has them;
    - ivs/evs are default -> preset -> explicit raw value;
    - the preset's moves replace the current list outright;
    - boosts, cur_hp, status and is_dynamaxed are left alone.
    """
    merged = dict(opts)
    merged["name"] = species_name
    merged["level"] = preset.level or opts["level"]
    merged["ability"] = preset.ability or opts["ability"]
    merged["item"] = preset.item or opts["item"]
    merged["nature"] = preset.nature or opts["nature"]
    merged["ivs"] = complete_ivs(preset.ivs, raw.get("ivs"))
    merged["evs"] = complete_evs(preset.evs, raw.get("evs"))
    if preset.moves is not None:
        merged["moves"] = list(preset.moves)
    return merged

def _trainer_fields(trainer_ref: Mapping[str, Any]) -> tuple:
    if not isinstance(trainer_ref, Mapping):
        raise InvalidTrainerReference("speciesName")
    for key in ("speciesName", "trainerName"):
        value = trainer_ref.get(key)
        if not isinstance(value, str) or not value.strip():
            raise InvalidTrainerReference(key)
    return trainer_ref["speciesName"], trainer_ref["trainerName"]

def build_config(
    resolver: Optional[TrainerSetResolver],
    generation: int,
    raw: Optional[Mapping[str, Any]],
) -> CombatantConfig:
    raw = raw or {}
    opts = apply_overrides(raw)

    trainer_ref = raw.get("trainerPokemon")
    if trainer_ref:
        if resolver is None:
            raise ValueError("A trainer reference needs a TrainerSetResolver.")
        species_name, trainer_name = _trainer_fields(trainer_ref)
        preset = resolver.resolve_one(generation, species_name, trainer_name)
        opts = apply_preset(opts, species_name, preset, raw)

    if not opts["name"]:
        raise MissingPokemonName()
    return CombatantConfig(**opts)
