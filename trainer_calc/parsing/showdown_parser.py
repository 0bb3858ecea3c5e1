import re
from typing import Any, Dict, List, Optional

# Showdown labels -> engine stat keys
_LAB = {"hp": "hp", "atk": "atk", "def": "def", "spa": "spa", "spd": "spd", "spe": "spe"}

# Tolerant regexes (ignore extra spaces around ':')
RE_KV = {
    "ability": re.compile(r"^\s*ability\s*\:\s*(.+)\s*$", re.I),
    "item":    re.compile(r"^\s*item\s*\:\s*(.+)\s*$", re.I),
    "level":   re.compile(r"^\s*level\s*\:\s*(\d+)\s*$", re.I),
    "evs":     re.compile(r"^\s*evs\s*\:\s*(.+)\s*$", re.I),
    "ivs":     re.compile(r"^\s*ivs\s*\:\s*(.+)\s*$", re.I),
}
RE_NATURE = re.compile(r"^\s*([A-Za-z]+)\s+Nature\s*$", re.I)

# ascii dash and common bullets start a move line
RE_MOVE = re.compile(r"^\s*[\-\–\—\•\·]\s*(.+?)\s*$")

def _parse_spread(spread_line: str, clamp_max: int) -> Dict[str, int]:
    """
    '252 HP / 4 Def / 252 Spe' -> {'hp': 252, 'def': 4, 'spe': 252}.
    Only the stats written in the line are returned; the merger fills the rest.
    """
    out: Dict[str, int] = {}
    parts = [p.strip() for p in spread_line.split("/") if p.strip()]
    for part in parts:
        m = re.match(r"(?P<value>\d+)\s+(?P<label>HP|Atk|Def|SpA|SpD|Spe)", part, flags=re.I)
        if not m:
            continue
        val = max(0, min(clamp_max, int(m.group("value"))))
        out[_LAB[m.group("label").lower()]] = val
    return out

def parse_showdown_text(data_str: str) -> Dict[str, Any]:
    """
    Turns a Showdown export block into a raw combatant config
    ({name, item, ability, level, nature, evs, ivs, moves}); keys the
    block does not mention are left out.
    """
    lines = [l.rstrip() for l in data_str.splitlines() if l.strip()]
    if not lines:
        raise ValueError("Empty Showdown set.")

    # 'Nickname (Species) (M) @ Item' | 'Species (F) @ Item' | 'Species'
    m1 = re.match(
        r"^(?P<head>[^@]+?)(?:\s*@\s*(?P<item>.+))?$",
        lines[0]
    )
    if not m1:
        raise ValueError(f"Could not parse first line: '{lines[0]}'")

    head = re.sub(r"\s*\((?:M|F)\)\s*$", "", m1.group("head").strip())
    nick = re.match(r"^.+?\((?P<species>[^()]+)\)$", head)
    name = (nick.group("species") if nick else head).strip()
    if not name:
        raise ValueError(f"Could not parse first line: '{lines[0]}'")

    raw: Dict[str, Any] = {"name": name}
    item: Optional[str] = (m1.group("item") or "").strip() or None
    if item:
        raw["item"] = item
    moves: List[str] = []

    for line in lines[1:]:
        for key, rx in RE_KV.items():
            m = rx.match(line)
            if m:
                val = m.group(1).strip()
                if key == "level":
                    raw["level"] = int(val)
                elif key == "evs":
                    raw["evs"] = _parse_spread(val, clamp_max=252)
                elif key == "ivs":
                    raw["ivs"] = _parse_spread(val, clamp_max=31)
                elif val:
                    raw[key] = val
                break
        else:
            mnat = RE_NATURE.match(line)
            if mnat:
                raw["nature"] = mnat.group(1).capitalize()
                continue

            mm = RE_MOVE.match(line)
            if mm:
                move = mm.group(1).strip()
                if move:
                    moves.append(move)
                continue
            # other lines (Shiny, Happiness, Tera Type...) are ignored

    if moves:
        raw["moves"] = moves
    return raw
