from typing import Any, Dict, List, Mapping, Optional
from ..models.matchup import FieldConfig, MatchupResult
from ..models.preset import TrainerPokemonSet
from ..services.config_merger import build_config
from ..services.damage_engine import DamageEngine
from ..services.dataset_index import DatasetIndex
from ..services.matchup import compute_matchup
from ..services.trainer_sets import TrainerSetResolver

DEFAULT_GENERATION = 9

class MatchupController:
    def __init__(self, dataset: DatasetIndex, engine: Optional[DamageEngine] = None):
        self.dataset = dataset
        self.engine = engine
        self.resolver = TrainerSetResolver(dataset)

    def calculate(self, options: Mapping[str, Any]) -> MatchupResult:
        if self.engine is None:
            raise RuntimeError("MatchupController needs a damage engine to calculate.")
        generation = options.get("generation") or DEFAULT_GENERATION
        config1 = build_config(self.resolver, generation, options.get("pokemon1"))
        config2 = build_config(self.resolver, generation, options.get("pokemon2"))
        field = FieldConfig.from_dict(options.get("field"))
        return compute_matchup(self.engine, generation, config1, config2, field)

    def calculate_damage(self, options: Mapping[str, Any]) -> Dict[str, Any]:
        return self.calculate(options).to_dict()

    def trainer_sets(self, generation: int, trainer_name: str) -> List[TrainerPokemonSet]:
        return [
            TrainerPokemonSet.from_preset(species, preset)
            for species, _set_name, preset in self.resolver.resolve_all(generation, trainer_name)
        ]

    def get_trainer_pokemon_sets(self, generation: int, trainer_name: str) -> List[Dict[str, Any]]:
        return [s.to_dict() for s in self.trainer_sets(generation, trainer_name)]
