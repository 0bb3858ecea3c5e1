from __future__ import annotations

class TrainerCalcError(Exception):
    """Base for internal errors."""

class DataLoadError(TrainerCalcError):
    def __init__(self, path: str, detail: str):
        super().__init__(f"Failed loading '{path}': {detail}")
        self.path = path
        self.detail = detail

class DatasetNotFound(TrainerCalcError):
    def __init__(self, generation: int):
        super().__init__(f"Pokémon set data not found for Generation {generation}.")
        self.generation = generation

class SpeciesNotFound(TrainerCalcError):
    def __init__(self, species: str, generation: int):
        super().__init__(f"Pokémon species '{species}' not found in sets for Generation {generation}.")
        self.species = species
        self.generation = generation

class TrainerSetNotFound(TrainerCalcError):
    def __init__(self, species: str, trainer_name: str, generation: int):
        super().__init__(
            f"Trainer '{trainer_name}' with Pokémon '{species}' not found in sets for Generation {generation}."
        )
        self.species = species
        self.trainer_name = trainer_name
        self.generation = generation

class MissingPokemonName(TrainerCalcError):
    def __init__(self):
        super().__init__("Pokémon name is required. Please specify 'name' or 'trainerPokemon.speciesName'.")

class InvalidTrainerReference(TrainerCalcError):
    def __init__(self, field: str):
        super().__init__(f"trainerPokemon.{field} is required and must be a non-empty string.")
        self.field = field

class UnknownGeneration(TrainerCalcError):
    def __init__(self, generation):
        super().__init__(f"Generation {generation} is not supported by the damage engine.")
        self.generation = generation

class EngineError(TrainerCalcError):
    """The damage engine rejected a request or could not be reached."""

class CalculationError(EngineError):
    """A single move calculation failed; degraded to an empty hit by the formatter."""
