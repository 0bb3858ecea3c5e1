import pytest

from trainer_calc.errors import CalculationError
from trainer_calc.models.preset import Preset
from trainer_calc.services.damage_engine import CalcResult, DamageEngine, EngineCombatant, EngineMove
from trainer_calc.services.dataset_index import DatasetIndex
from trainer_calc.services.trainer_sets import TrainerSetResolver


def _p(name, **attrs):
    return Preset.from_setdex(name, attrs)


GEN8_SETS = {
    "Staryu": {
        "Fisherman Elliot": _p(
            "Fisherman Elliot", level=13, ability="Illuminate", item="Oran Berry", nature="Timid",
            evs={"spa": 20, "spe": 252}, moves=["Water Gun", "Rapid Spin", "Tackle"],
        ),
        "Swimmer Elliot": _p("Swimmer Elliot", level=20, moves=["Bubble Beam"]),
        "Route 4 #2": _p("Route 4 #2", level=9, trainer="Youngster Joey", moves=["Tackle"]),
    },
    "Onix": {
        "Leader Brock": _p("Leader Brock", level=14, ability="Sturdy", moves=["Rock Tomb", "Bind"]),
        "Leader Misty Rematch": _p("Leader Misty Rematch", level=60, moves=["Stone Edge"]),
        "Leader Misty": _p("Leader Misty", level=55, moves=["Earthquake"]),
    },
    "Ampharos-Mega": {
        "Leader Wattson": _p(
            "Leader Wattson", level=24, ability="Static", item="Ampharosite", nature="Modest",
            ivs={"atk": 0}, evs={"hp": 252, "spa": 252, "spe": 4},
            moves=["Thunderbolt", "Dragon Pulse", "Thunder Wave"],
        ),
    },
    "Magikarp": {
        "Mr. Fuji": _p("Mr. Fuji", level=5, moves=["Splash"]),
        "MrX Fuji": _p("MrX Fuji", level=6, moves=["Splash"]),
    },
    "Ditto": {
        "Scientist Ted": _p("Scientist Ted", level=30),
    },
}

GEN9_SETS = {
    "Garchomp": {
        "Ace Trainer Cynthia": _p("Ace Trainer Cynthia", level=66, moves=["Dragon Claw", "Earthquake"]),
    },
}


class FakeEngine(DamageEngine):
    """
    In-process stand-in for the calc service. Damage is a fixed table keyed by
    move; crits multiply by 1.5. Every calculate() call is recorded.
    """

    MAX_HP = {"Garchomp": 357, "Corviknight": 402, "Staryu": 40, "Snorlax": 60}
    BASE_POWER = {
        "Dragon Claw": 80, "Earthquake": 100, "Brave Bird": 120, "Body Press": 80,
        "Water Gun": 40, "Tackle": 40, "Thunderbolt": 90, "Dragon Pulse": 85,
        "Swords Dance": 0, "Iron Defense": 0, "Roost": 0, "Thunder Wave": 0, "Splash": 0,
        "Glitch Beam": 100,
    }
    DAMAGE = {
        "Dragon Claw": (81, 96), "Brave Bird": (100, 118), "Body Press": (70, 84),
        "Water Gun": (10, 12), "Tackle": (8, 10), "Thunderbolt": (30, 36), "Dragon Pulse": (25, 30),
    }

    def __init__(self):
        self.calls = []
        self.pokemon_options = {}

    def pokemon(self, gen, name, options):
        self.pokemon_options[name] = options
        return EngineCombatant(
            species=name, name=name, level=options.get("level", 100),
            ability=options.get("ability"), item=options.get("item"),
            hp=self.MAX_HP.get(name, 300), options=options,
        )

    def move(self, gen, name, is_crit=False):
        if name not in self.BASE_POWER:
            raise CalculationError(f"Unknown move {name}")
        return EngineMove(name=name, bp=self.BASE_POWER[name], is_crit=is_crit)

    def calculate(self, gen, attacker, defender, move, field):
        self.calls.append((attacker.name, defender.name, move.name, move.is_crit, field.options))
        if move.name == "Glitch Beam":
            raise CalculationError("Glitch Beam is not supported in this generation")
        if move.name == "Earthquake" and defender.name == "Corviknight":
            return CalcResult((0, 0), "", "")
        lo, hi = self.DAMAGE.get(move.name, (1, 2))
        if move.is_crit:
            lo, hi = int(lo * 1.5), int(hi * 1.5)
        return CalcResult(
            (lo, hi),
            "guaranteed 5HKO",
            f"{attacker.name} {move.name} vs. {defender.name}: {lo}-{hi}",
        )


@pytest.fixture
def dataset():
    return DatasetIndex({8: GEN8_SETS, 9: GEN9_SETS})


@pytest.fixture
def resolver(dataset):
    return TrainerSetResolver(dataset)


@pytest.fixture
def engine():
    return FakeEngine()
