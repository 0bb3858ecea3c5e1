import pytest

from trainer_calc.controllers.matchup_controller import MatchupController
from trainer_calc.errors import DatasetNotFound, MissingPokemonName, UnknownGeneration
from trainer_calc.models.matchup import CombatantConfig, FieldConfig, SideCondition
from trainer_calc.services.matchup import compute_matchup


def test_end_to_end_garchomp_vs_corviknight(dataset, engine):
    controller = MatchupController(dataset, engine)
    result = controller.calculate_damage({
        "generation": 9,
        "pokemon1": {"name": "Garchomp", "moves": ["Dragon Claw"]},
        "pokemon2": {"name": "Corviknight"},
        "field": {"pokemon2Side": {"isSR": True}},
    })

    assert result["generation"] == 9
    forward = result["pokemon1AttackingPokemon2"]
    assert [m["moveName"] for m in forward["moves"]] == ["Dragon Claw"]
    assert forward["moves"][0]["normalHit"]["damageRange"][1] > 0
    assert forward["moves"][0]["criticalHit"]["damageRange"][1] > 0
    assert "message" not in forward

    backward = result["pokemon2AttackingPokemon1"]
    assert backward["moves"] == []
    assert backward["message"] == "Corviknight has no moves to calculate."
    assert backward["attacker"] == {"name": "Corviknight", "level": 100, "ability": "N/A", "item": "N/A"}
    assert backward["defender"]["name"] == "Garchomp"

    # stealth rock sits on the defender's side when Garchomp attacks
    field = engine.calls[0][4]
    assert field["attackerSide"]["isSR"] is False
    assert field["defenderSide"]["isSR"] is True


def test_sides_swap_with_direction(engine):
    field = FieldConfig(
        weather="Rain",
        is_gravity=True,
        pokemon1_side=SideCondition(is_reflect=True),
        pokemon2_side=SideCondition(spikes=2),
    )
    compute_matchup(
        engine, 9,
        CombatantConfig(name="Garchomp", moves=["Dragon Claw"]),
        CombatantConfig(name="Corviknight", moves=["Brave Bird"]),
        field,
    )
    fields = {call[0]: call[4] for call in engine.calls}
    assert fields["Garchomp"]["attackerSide"]["isReflect"] is True
    assert fields["Garchomp"]["defenderSide"]["spikes"] == 2
    assert fields["Corviknight"]["attackerSide"]["spikes"] == 2
    assert fields["Corviknight"]["defenderSide"]["isReflect"] is True
    for opts in fields.values():
        assert opts["weather"] == "Rain"
        assert opts["isGravity"] is True


def test_every_move_gets_normal_and_critical_hit_in_order(engine):
    result = compute_matchup(
        engine, 9,
        CombatantConfig(name="Corviknight", moves=["Brave Bird", "Body Press", "Iron Defense", "Roost"]),
        CombatantConfig(name="Garchomp", moves=[]),
    )
    moves = result.pokemon1_attacking_pokemon2.moves
    assert [m.move_name for m in moves] == ["Brave Bird", "Body Press", "Iron Defense", "Roost"]
    assert moves[2].normal_hit.ko_chance == "No damaging effect"
    # two damaging moves, two engine calls each
    assert len(engine.calls) == 4


def test_one_failing_move_does_not_abort_the_rest(engine):
    result = compute_matchup(
        engine, 9,
        CombatantConfig(name="Garchomp", moves=["Glitch Beam", "Dragon Claw", "Earthquake"]),
        CombatantConfig(name="Corviknight", moves=["Brave Bird"]),
    )
    forward = result.pokemon1_attacking_pokemon2.moves
    assert forward[0].normal_hit.ko_chance == "Calculation Error / No effect"
    assert forward[0].critical_hit.ko_chance == "Calculation Error / No effect"
    assert forward[1].normal_hit.damage_range == (81, 96)
    assert forward[2].normal_hit.ko_chance == "Immune / No damaging effect"
    assert result.pokemon2_attacking_pokemon1.moves[0].normal_hit.damage_range == (100, 118)


def test_both_directions_without_moves(engine):
    result = compute_matchup(engine, 9, CombatantConfig(name="Garchomp"), CombatantConfig(name="Corviknight"))
    assert result.pokemon1_attacking_pokemon2.moves == []
    assert result.pokemon1_attacking_pokemon2.message == "Garchomp has no moves to calculate."
    assert result.pokemon2_attacking_pokemon1.message == "Corviknight has no moves to calculate."
    assert engine.calls == []


def test_trainer_reference_through_controller(dataset, engine):
    controller = MatchupController(dataset, engine)
    result = controller.calculate({
        "generation": 8,
        "pokemon1": {"trainerPokemon": {"speciesName": "Staryu", "trainerName": "Fisherman Elliot"}},
        "pokemon2": {"name": "Snorlax", "level": 13, "item": "Leftovers", "moves": ["Tackle"]},
    })
    assert result.generation == 8
    assert result.pokemon1.to_dict() == {"name": "Staryu", "level": 13, "ability": "Illuminate", "item": "Oran Berry"}
    assert [m.move_name for m in result.pokemon1_attacking_pokemon2.moves] == ["Water Gun", "Rapid Spin", "Tackle"]
    # Rapid Spin is unknown to the fake engine: degraded, not fatal
    assert result.pokemon1_attacking_pokemon2.moves[1].normal_hit.ko_chance == "Calculation Error / No effect"
    assert engine.pokemon_options["Staryu"]["evs"]["spe"] == 252


def test_generation_defaults_to_nine(dataset, engine):
    result = MatchupController(dataset, engine).calculate({
        "pokemon1": {"trainerPokemon": {"speciesName": "Garchomp", "trainerName": "Cynthia"}},
        "pokemon2": {"name": "Corviknight"},
    })
    assert result.generation == 9
    assert result.pokemon1.level == 66


def test_resolution_errors_abort_the_request(dataset, engine):
    controller = MatchupController(dataset, engine)
    with pytest.raises(MissingPokemonName):
        controller.calculate({"generation": 9, "pokemon1": {"name": "Garchomp"}, "pokemon2": {}})
    with pytest.raises(DatasetNotFound):
        controller.calculate({
            "generation": 3,
            "pokemon1": {"trainerPokemon": {"speciesName": "Onix", "trainerName": "Brock"}},
            "pokemon2": {"name": "Corviknight"},
        })
    assert engine.calls == []


def test_unknown_generation(engine):
    with pytest.raises(UnknownGeneration):
        compute_matchup(engine, 12, CombatantConfig(name="Garchomp"), CombatantConfig(name="Corviknight"))


def test_trainer_listing(dataset):
    sets = MatchupController(dataset).get_trainer_pokemon_sets(8, "Wattson")
    assert sets == [{
        "speciesName": "Ampharos-Mega",
        "setName": "Leader Wattson",
        "level": 24,
        "ability": "Static",
        "item": "Ampharosite",
        "nature": "Modest",
        "ivs": {"atk": 0},
        "evs": {"hp": 252, "spa": 252, "spe": 4},
        "moves": ["Thunderbolt", "Dragon Pulse", "Thunder Wave"],
    }]


def test_trainer_listing_fills_missing_fields(dataset):
    sets = MatchupController(dataset).get_trainer_pokemon_sets(8, "Ted")
    assert sets[0]["ability"] == "N/A"
    assert sets[0]["item"] == "N/A"
    assert sets[0]["nature"] == "Serious"
    assert sets[0]["ivs"]["hp"] == 31
    assert sets[0]["evs"]["hp"] == 0
    assert sets[0]["moves"] == []


def test_controller_without_engine_cannot_calculate(dataset):
    with pytest.raises(RuntimeError):
        MatchupController(dataset).calculate({"pokemon1": {"name": "A"}, "pokemon2": {"name": "B"}})
