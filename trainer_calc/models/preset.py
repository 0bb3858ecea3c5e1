from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..utils.stats import DEFAULT_EVS, DEFAULT_IVS

@dataclass(frozen=True)
class Preset:
    """One named set of a species as declared in a setdex file."""
    name: str
    level: Optional[int] = None
    ability: Optional[str] = None
    item: Optional[str] = None
    nature: Optional[str] = None
    ivs: Optional[Mapping[str, int]] = None
    evs: Optional[Mapping[str, int]] = None
    # None = the set does not define moves; () = it defines an empty move list
    moves: Optional[Tuple[str, ...]] = None
    trainer: Optional[str] = None

    def __post_init__(self):
        # stat spreads are read-only views
        for key in ("ivs", "evs"):
            value = getattr(self, key)
            if value is not None:
                object.__setattr__(self, key, MappingProxyType(dict(value)))

    @classmethod
    def from_setdex(cls, name: str, raw: Mapping[str, Any]) -> "Preset":
        moves = raw.get("moves")
        return cls(
            name=name,
            level=raw.get("level"),
            ability=raw.get("ability"),
            item=raw.get("item"),
            nature=raw.get("nature"),
            ivs=raw["ivs"] if raw.get("ivs") else None,
            evs=raw["evs"] if raw.get("evs") else None,
            moves=tuple(moves) if moves is not None else None,
            trainer=raw.get("trainer"),
        )

    def to_setdex(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for key in ("level", "ability", "item", "nature", "ivs", "evs", "trainer"):
            value = getattr(self, key)
            if isinstance(value, Mapping):
                out[key] = dict(value)
            elif value is not None:
                out[key] = value
        if self.moves is not None:
            out["moves"] = list(self.moves)
        return out

# species -> set name -> Preset, both levels in declaration order
PresetCollection = Mapping[str, Mapping[str, Preset]]

@dataclass
class TrainerPokemonSet:
    species_name: str
    set_name: str
    level: Optional[int] = None
    ability: str = "N/A"
    item: str = "N/A"
    nature: str = "Serious"
    ivs: Dict[str, int] = field(default_factory=lambda: dict(DEFAULT_IVS))
    evs: Dict[str, int] = field(default_factory=lambda: dict(DEFAULT_EVS))
    moves: List[str] = field(default_factory=list)

    @classmethod
    def from_preset(cls, species_name: str, preset: Preset) -> "TrainerPokemonSet":
        # missing sextuples fall back to the defaults as a whole, not key by key
        return cls(
            species_name=species_name,
            set_name=preset.name,
            level=preset.level,
            ability=preset.ability or "N/A",
            item=preset.item or "N/A",
            nature=preset.nature or "Serious",
            ivs=dict(preset.ivs) if preset.ivs else dict(DEFAULT_IVS),
            evs=dict(preset.evs) if preset.evs else dict(DEFAULT_EVS),
            moves=list(preset.moves or []),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "speciesName": self.species_name,
            "setName": self.set_name,
            "level": self.level,
            "ability": self.ability,
            "item": self.item,
            "nature": self.nature,
            "ivs": dict(self.ivs),
            "evs": dict(self.evs),
            "moves": list(self.moves),
        }
