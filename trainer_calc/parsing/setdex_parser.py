import json
import re
from typing import Any, Dict, Optional

from ..errors import DataLoadError
from ..models.preset import Preset, PresetCollection

# Global variable each calculator setdex file assigns, by generation
SETDEX_VARS = {
    1: "SETDEX_RBY",
    2: "SETDEX_GSC",
    3: "SETDEX_ADV",
    4: "SETDEX_DPP",
    5: "SETDEX_BW",
    6: "SETDEX_XY",
    7: "SETDEX_SM",
    8: "SETDEX_SS",
    9: "SETDEX_SV",
}

# 'var SETDEX_SV = {...};'  (var/let/const, optional trailing semicolon)
RE_ASSIGN = re.compile(r"^\s*(?:var|let|const)\s+(?P<var>[A-Za-z_$][\w$]*)\s*=\s*", re.M)

def _extract_assignments(text: str) -> Dict[str, str]:
    """
    Returns {variable_name: json_literal} for every top-level assignment.
    Each literal runs up to the next assignment (or EOF) minus the trailing ';'.
    """
    matches = list(RE_ASSIGN.finditer(text))
    out: Dict[str, str] = {}
    for i, m in enumerate(matches):
        end = matches[i + 1].start() if i + 1 < len(matches) else len(text)
        literal = text[m.end():end].strip()
        if literal.endswith(";"):
            literal = literal[:-1].rstrip()
        out[m.group("var")] = literal
    return out

def _to_collection(raw: Any, path: str) -> PresetCollection:
    if not isinstance(raw, dict):
        raise DataLoadError(path, "setdex root must be an object of species")
    collection: Dict[str, Dict[str, Preset]] = {}
    for species, sets in raw.items():
        if not isinstance(sets, dict):
            raise DataLoadError(path, f"sets for '{species}' must be an object")
        species_sets: Dict[str, Preset] = {}
        for set_name, attrs in sets.items():
            if not isinstance(attrs, dict):
                raise DataLoadError(path, f"set '{set_name}' of '{species}' must be an object")
            species_sets[set_name] = Preset.from_setdex(set_name, attrs)
        collection[species] = species_sets
    return collection

def parse_setdex_text(text: str, var_name: Optional[str] = None, path: str = "<string>") -> PresetCollection:
    """
    Parses a setdex source. Plain JSON is accepted as-is; JS sources must
    assign `var_name` (e.g. `var SETDEX_SV = {...};`). Key order of the source
    is kept at both levels since trainer matching depends on it.
    """
    stripped = text.strip()
    if not stripped:
        raise DataLoadError(path, "file is empty")

    if stripped.startswith("{"):
        literal = stripped
    else:
        assignments = _extract_assignments(text)
        if var_name is None:
            if len(assignments) != 1:
                raise DataLoadError(path, "cannot tell which variable holds the sets")
            literal = next(iter(assignments.values()))
        elif var_name not in assignments:
            raise DataLoadError(path, f"Variable '{var_name}' not found after evaluation.")
        else:
            literal = assignments[var_name]

    try:
        raw = json.loads(literal)
    except json.JSONDecodeError as e:
        raise DataLoadError(path, f"invalid set data: {e}") from e
    return _to_collection(raw, path)

def parse_setdex_file(path: str, generation: int) -> PresetCollection:
    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except OSError as e:
        raise DataLoadError(path, str(e)) from e
    return parse_setdex_text(text, SETDEX_VARS.get(generation), path=path)
