import json

import pytest

from trainer_calc.errors import DataLoadError
from trainer_calc.parsing.setdex_parser import parse_setdex_file, parse_setdex_text


def test_js_assignment():
    coll = parse_setdex_text(
        'var SETDEX_SV = {"Corviknight": {"Leader Kofu": {"level": 30, "moves": []}}};',
        "SETDEX_SV",
    )
    preset = coll["Corviknight"]["Leader Kofu"]
    assert preset.name == "Leader Kofu"
    assert preset.level == 30
    # an explicit empty move list is kept apart from "no moves"
    assert preset.moves == ()
    assert preset.ability is None


def test_picks_requested_variable_among_several():
    text = 'var OTHER = {"x": 1};\nconst SETDEX_SS = {"Snorlax": {"Lass Kim": {"level": 12}}}\n'
    coll = parse_setdex_text(text, "SETDEX_SS")
    assert list(coll) == ["Snorlax"]


def test_plain_json():
    coll = parse_setdex_text('{"B": {"y": {}}, "A": {"x": {}}}')
    assert list(coll) == ["B", "A"]


def test_missing_variable():
    with pytest.raises(DataLoadError, match="SETDEX_SV"):
        parse_setdex_text("var SETDEX_SS = {};", "SETDEX_SV")


@pytest.mark.parametrize("text", ["", "var SETDEX_SV = {not json};", '{"A": []}', '{"A": {"x": 3}}'])
def test_malformed(text):
    with pytest.raises(DataLoadError):
        parse_setdex_text(text, "SETDEX_SV")


def test_to_setdex_round_trip():
    raw = {"level": 5, "item": "Oran Berry", "evs": {"hp": 4}, "moves": ["Tackle"], "trainer": "Lass Ann"}
    coll = parse_setdex_text('{"Pidgey": {"Lass Ann": %s}}' % json.dumps(raw))
    assert coll["Pidgey"]["Lass Ann"].to_setdex() == raw


def test_unreadable_file(tmp_path):
    with pytest.raises(DataLoadError):
        parse_setdex_file(str(tmp_path / "gen9.js"), 9)
