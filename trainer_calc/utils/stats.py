from typing import Dict, Mapping, Optional

STAT_KEYS = ["hp", "atk", "def", "spa", "spd", "spe"]

DEFAULT_IVS: Dict[str, int] = {k: 31 for k in STAT_KEYS}
DEFAULT_EVS: Dict[str, int] = {k: 0 for k in STAT_KEYS}

def merge_stats(*layers: Optional[Mapping[str, Optional[int]]]) -> Dict[str, int]:
    """
    Overlay partial stat mappings left to right; later layers win key by key.
    Missing layers and keys set to None are skipped, so a partial input such as
    {"atk": 252, "spe": None} only touches atk.
    """
    out: Dict[str, int] = {}
    for layer in layers:
        if not layer:
            continue
        for key, value in layer.items():
            if value is None:
                continue
            out[key] = int(value)
    return out

def complete_ivs(*overrides: Optional[Mapping[str, Optional[int]]]) -> Dict[str, int]:
    return merge_stats(DEFAULT_IVS, *overrides)

def complete_evs(*overrides: Optional[Mapping[str, Optional[int]]]) -> Dict[str, int]:
    return merge_stats(DEFAULT_EVS, *overrides)
