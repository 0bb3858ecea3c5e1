# trainer_calc/services/damage_engine.py
"""
Damage engine contract and the HTTP client for a Node @smogon/calc bridge.

The formulas live in the engine; this side only builds requests and reads
back ranges, KO-chance text and descriptions.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

import requests

from ..errors import CalculationError, EngineError, UnknownGeneration

log = logging.getLogger(__name__)

SUPPORTED_GENERATIONS = range(1, 10)

@dataclass(frozen=True)
class Generation:
    num: int

@dataclass
class EngineCombatant:
    species: str
    name: str
    level: int
    ability: Optional[str]
    item: Optional[str]
    hp: int
    options: Dict[str, Any] = field(default_factory=dict)

    def max_hp(self) -> int:
        return self.hp

@dataclass(frozen=True)
class EngineMove:
    name: str
    bp: int
    is_crit: bool = False

@dataclass(frozen=True)
class EngineField:
    options: Dict[str, Any]

@dataclass(frozen=True)
class CalcResult:
    damage_range: Tuple[int, int]
    ko_chance: str
    description: str

class DamageEngine:
    """What the matchup code needs from a damage calculator."""

    def generation(self, num: int) -> Generation:
        if num not in SUPPORTED_GENERATIONS:
            raise UnknownGeneration(num)
        return Generation(num)

    def pokemon(self, gen: Generation, name: str, options: Dict[str, Any]) -> EngineCombatant:
        raise NotImplementedError

    def move(self, gen: Generation, name: str, is_crit: bool = False) -> EngineMove:
        raise NotImplementedError

    def field(self, options: Dict[str, Any]) -> EngineField:
        return EngineField(dict(options))

    def calculate(
        self,
        gen: Generation,
        attacker: EngineCombatant,
        defender: EngineCombatant,
        move: EngineMove,
        field: EngineField,
    ) -> CalcResult:
        raise NotImplementedError

def _error_detail(resp: requests.Response) -> str:
    try:
        data = resp.json()
    except ValueError:
        data = None
    if isinstance(data, dict) and data.get("error"):
        return str(data["error"])
    return f"{resp.status_code} - {resp.text}"

class SmogonCalcClient(DamageEngine):
    """
    Talks to a Node service wrapping @smogon/calc:

        POST /pokemon    {gen, name, options}          -> {name, level, ability, item, maxHP}
        POST /move       {gen, name, options: {isCrit}} -> {name, bp}
        POST /calculate  {gen, attacker, defender, move, field}
                                                         -> {range: [min, max], kochance: {text}, desc}

    Errors come back as non-2xx responses with {"error": message}.
    """

    def __init__(self, base_url: str, timeout: float = 15.0, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def __enter__(self) -> "SmogonCalcClient":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def close(self) -> None:
        self.session.close()

    def _post(self, path: str, payload: Dict[str, Any], error_cls=EngineError) -> Dict[str, Any]:
        url = self.base_url + path
        try:
            r = self.session.post(url, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            raise error_cls(f"calc service unreachable at {url}: {e}") from e
        if r.status_code != 200:
            raise error_cls(_error_detail(r))
        try:
            data = r.json()
        except ValueError as e:
            raise error_cls(f"calc service returned invalid JSON for {path}") from e
        if not isinstance(data, dict):
            raise error_cls(f"calc service returned unexpected payload for {path}")
        return data

    def pokemon(self, gen: Generation, name: str, options: Dict[str, Any]) -> EngineCombatant:
        data = self._post("/pokemon", {"gen": gen.num, "name": name, "options": options})
        try:
            hp = int(data["maxHP"])
            level = int(data.get("level") or options.get("level") or 100)
        except (KeyError, TypeError, ValueError) as e:
            raise EngineError(f"calc service did not report max HP and level for {name}") from e
        return EngineCombatant(
            species=name,
            name=data.get("name") or name,
            level=level,
            ability=data.get("ability") or None,
            item=data.get("item") or None,
            hp=hp,
            options=dict(options),
        )

    def move(self, gen: Generation, name: str, is_crit: bool = False) -> EngineMove:
        data = self._post(
            "/move",
            {"gen": gen.num, "name": name, "options": {"isCrit": is_crit}},
            CalculationError,
        )
        try:
            bp = int(data.get("bp") or 0)
        except (TypeError, ValueError) as e:
            raise CalculationError(
                f"calc service returned invalid base power for {name}: {data.get('bp')!r}"
            ) from e
        return EngineMove(name=data.get("name") or name, bp=bp, is_crit=is_crit)

    def calculate(self, gen, attacker, defender, move, field) -> CalcResult:
        payload = {
            "gen": gen.num,
            "attacker": {"name": attacker.species, "options": attacker.options},
            "defender": {"name": defender.species, "options": defender.options},
            "move": {"name": move.name, "options": {"isCrit": move.is_crit}},
            "field": field.options,
        }
        data = self._post("/calculate", payload, CalculationError)
        try:
            lo, hi = data["range"]
            kochance = data.get("kochance") or {}
            if not isinstance(kochance, dict):
                raise TypeError(f"kochance should be an object, got {type(kochance).__name__}")
            result = CalcResult(
                damage_range=(int(lo), int(hi)),
                ko_chance=str(kochance.get("text", "")),
                description=str(data.get("desc", "")),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise CalculationError(f"malformed calculation result: {e}") from e
        log.debug("%s -> %s with %s: %s", attacker.name, defender.name, move.name, result.damage_range)
        return result
