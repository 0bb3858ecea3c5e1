from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from ..utils.stats import DEFAULT_EVS, DEFAULT_IVS

@dataclass
class CombatantConfig:
    name: str
    level: int = 100
    ability: Optional[str] = None
    item: Optional[str] = None
    nature: str = "Serious"
    ivs: Dict[str, int] = field(default_factory=lambda: dict(DEFAULT_IVS))
    evs: Dict[str, int] = field(default_factory=lambda: dict(DEFAULT_EVS))
    boosts: Dict[str, int] = field(default_factory=dict)
    cur_hp: Optional[int] = None
    status: str = ""
    is_dynamaxed: bool = False
    moves: List[str] = field(default_factory=list)

    def to_engine_options(self) -> Dict[str, Any]:
        """Options object in the shape the damage engine's Pokemon constructor takes."""
        opts: Dict[str, Any] = {
            "name": self.name,
            "level": self.level,
            "nature": self.nature,
            "ivs": dict(self.ivs),
            "evs": dict(self.evs),
            "boosts": dict(self.boosts),
            "status": self.status,
            "isDynamaxed": self.is_dynamaxed,
            "moves": list(self.moves),
        }
        if self.ability is not None:
            opts["ability"] = self.ability
        if self.item is not None:
            opts["item"] = self.item
        if self.cur_hp is not None:
            opts["curHP"] = self.cur_hp
        return opts

@dataclass(frozen=True)
class SideCondition:
    is_sr: bool = False
    spikes: int = 0
    is_reflect: bool = False
    is_light_screen: bool = False

    @classmethod
    def from_dict(cls, raw: Optional[Mapping[str, Any]]) -> "SideCondition":
        raw = raw or {}
        return cls(
            is_sr=bool(raw.get("isSR") or False),
            spikes=int(raw.get("spikes") or 0),
            is_reflect=bool(raw.get("isReflect") or False),
            is_light_screen=bool(raw.get("isLightScreen") or False),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "isSR": self.is_sr,
            "spikes": self.spikes,
            "isReflect": self.is_reflect,
            "isLightScreen": self.is_light_screen,
        }

@dataclass(frozen=True)
class FieldConfig:
    weather: Optional[str] = None
    terrain: Optional[str] = None
    is_gravity: bool = False
    is_magic_room: bool = False
    is_wonder_room: bool = False
    is_beads_of_ruin: bool = False
    is_tablets_of_ruin: bool = False
    is_sword_of_ruin: bool = False
    is_vessel_of_ruin: bool = False
    pokemon1_side: SideCondition = field(default_factory=SideCondition)
    pokemon2_side: SideCondition = field(default_factory=SideCondition)

    _FLAGS = (
        ("is_gravity", "isGravity"),
        ("is_magic_room", "isMagicRoom"),
        ("is_wonder_room", "isWonderRoom"),
        ("is_beads_of_ruin", "isBeadsOfRuin"),
        ("is_tablets_of_ruin", "isTabletsOfRuin"),
        ("is_sword_of_ruin", "isSwordOfRuin"),
        ("is_vessel_of_ruin", "isVesselOfRuin"),
    )

    @classmethod
    def from_dict(cls, raw: Optional[Mapping[str, Any]]) -> "FieldConfig":
        raw = raw or {}
        flags = {attr: bool(raw.get(key) or False) for attr, key in cls._FLAGS}
        return cls(
            weather=raw.get("weather"),
            terrain=raw.get("terrain"),
            pokemon1_side=SideCondition.from_dict(raw.get("pokemon1Side")),
            pokemon2_side=SideCondition.from_dict(raw.get("pokemon2Side")),
            **flags,
        )

    def directional(self, attacker: int) -> Dict[str, Any]:
        """
        Field options for one attack direction. `attacker` is 1 or 2; that
        combatant's side becomes attackerSide, the other one defenderSide.
        Global flags are identical for both directions.
        """
        if attacker not in (1, 2):
            raise ValueError(f"attacker must be 1 or 2, got {attacker!r}")
        atk_side, def_side = (
            (self.pokemon1_side, self.pokemon2_side) if attacker == 1
            else (self.pokemon2_side, self.pokemon1_side)
        )
        opts: Dict[str, Any] = {key: getattr(self, attr) for attr, key in self._FLAGS}
        if self.weather is not None:
            opts["weather"] = self.weather
        if self.terrain is not None:
            opts["terrain"] = self.terrain
        opts["attackerSide"] = atk_side.to_dict()
        opts["defenderSide"] = def_side.to_dict()
        return opts

@dataclass(frozen=True)
class PokemonSummary:
    name: str
    level: int
    ability: str = "N/A"
    item: str = "N/A"

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "level": self.level, "ability": self.ability, "item": self.item}

@dataclass(frozen=True)
class HitResult:
    damage_range: Tuple[int, int]
    percentage_range: Tuple[float, float]
    ko_chance: str
    description: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "damageRange": list(self.damage_range),
            "percentageRange": list(self.percentage_range),
            "koChance": self.ko_chance,
            "description": self.description,
        }

@dataclass(frozen=True)
class MoveResult:
    move_name: str
    normal_hit: HitResult
    critical_hit: HitResult

    def to_dict(self) -> Dict[str, Any]:
        return {
            "moveName": self.move_name,
            "normalHit": self.normal_hit.to_dict(),
            "criticalHit": self.critical_hit.to_dict(),
        }

@dataclass
class AttackDirectionResult:
    attacker: PokemonSummary
    defender: PokemonSummary
    moves: List[MoveResult] = field(default_factory=list)
    message: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "attacker": self.attacker.to_dict(),
            "defender": self.defender.to_dict(),
            "moves": [m.to_dict() for m in self.moves],
        }
        if self.message is not None:
            out["message"] = self.message
        return out

@dataclass
class MatchupResult:
    generation: int
    pokemon1: PokemonSummary
    pokemon2: PokemonSummary
    pokemon1_attacking_pokemon2: AttackDirectionResult
    pokemon2_attacking_pokemon1: AttackDirectionResult

    def to_dict(self) -> Dict[str, Any]:
        return {
            "generation": self.generation,
            "pokemon1": self.pokemon1.to_dict(),
            "pokemon2": self.pokemon2.to_dict(),
            "pokemon1AttackingPokemon2": self.pokemon1_attacking_pokemon2.to_dict(),
            "pokemon2AttackingPokemon1": self.pokemon2_attacking_pokemon1.to_dict(),
        }
