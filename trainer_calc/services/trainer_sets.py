# trainer_calc/services/trainer_sets.py
from __future__ import annotations

import logging
import re
from typing import List, Optional, Tuple

from ..errors import SpeciesNotFound, TrainerSetNotFound
from ..models.preset import Preset
from .dataset_index import DatasetIndex

log = logging.getLogger(__name__)

def _trainer_pattern(trainer_name: str) -> re.Pattern:
    # whole word, case-insensitive; "Elliot" matches "Fisherman Elliot"
    return re.compile(rf"\b{re.escape(trainer_name)}\b", re.I)

def _first_word(s: str) -> str:
    return s.split(" ")[0]

def _is_strong_match(pattern: re.Pattern, set_name: str, preset: Preset) -> bool:
    if pattern.search(set_name):
        return True
    return bool(preset.trainer) and pattern.search(preset.trainer) is not None

class TrainerSetResolver:
    """Finds trainer presets inside a DatasetIndex."""

    def __init__(self, dataset: DatasetIndex):
        self.dataset = dataset

    def resolve_one(self, generation: int, species_name: str, trainer_name: str) -> Preset:
        """
        Best preset of `species_name` for `trainer_name`, in priority order:

        1. first set (declaration order) whose name or trainer label contains
           the trainer name as a whole word, case-insensitively;
        2. otherwise the first set whose first word equals the trainer
           name's first word;
        3. otherwise a set literally named `trainer_name`.
        """
        presets = self.dataset.get_presets(generation)
        species_sets = presets.get(species_name)
        if not species_sets:
            raise SpeciesNotFound(species_name, generation)

        pattern = _trainer_pattern(trainer_name)
        trainer_first = _first_word(trainer_name)
        weak: Optional[Preset] = None
        for set_name, preset in species_sets.items():
            if _is_strong_match(pattern, set_name, preset):
                log.debug("Trainer '%s' matched set '%s' of %s", trainer_name, set_name, species_name)
                return preset
            if weak is None and _first_word(set_name) == trainer_first:
                weak = preset

        if weak is not None:
            log.debug("Trainer '%s' fell back to set '%s' of %s", trainer_name, weak.name, species_name)
            return weak

        direct = species_sets.get(trainer_name)
        if direct is not None:
            return direct
        raise TrainerSetNotFound(species_name, trainer_name, generation)

    def resolve_all(self, generation: int, trainer_name: str) -> List[Tuple[str, str, Preset]]:
        """Every (species, set name, preset) whose set name or trainer label names the trainer."""
        presets = self.dataset.get_presets(generation)
        pattern = _trainer_pattern(trainer_name)
        found = []
        for species, sets in presets.items():
            for set_name, preset in sets.items():
                if _is_strong_match(pattern, set_name, preset):
                    found.append((species, set_name, preset))
        log.debug("Found %d sets for trainer '%s' in generation %d", len(found), trainer_name, generation)
        return found
