# trainer_calc/services/dataset_index.py
from __future__ import annotations

import logging
import os
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from sqlalchemy.engine import Engine

from ..db.base import make_session_factory, session_scope
from ..db.repository import list_generations, load_collection
from ..errors import DataLoadError, DatasetNotFound
from ..models.preset import PresetCollection
from ..parsing.setdex_parser import SETDEX_VARS, parse_setdex_file

log = logging.getLogger(__name__)

def _freeze(collection: PresetCollection) -> PresetCollection:
    return MappingProxyType({
        species: MappingProxyType(dict(sets)) for species, sets in collection.items()
    })

class DatasetIndex:
    """
    Read-only preset collections keyed by generation.

    Built once at startup and passed explicitly to whoever needs it; nothing
    mutates it afterwards, so it can be shared by concurrent requests.
    """

    def __init__(self, collections: Mapping[int, PresetCollection]):
        self._collections = MappingProxyType({
            int(gen): _freeze(coll) for gen, coll in collections.items()
        })

    def get_presets(self, generation: int) -> PresetCollection:
        try:
            return self._collections[generation]
        except KeyError:
            raise DatasetNotFound(generation) from None

    def generations(self) -> list[int]:
        return sorted(self._collections)

    def __contains__(self, generation: object) -> bool:
        return generation in self._collections

    @classmethod
    def from_directory(cls, directory: str, generations: Optional[Iterable[int]] = None) -> "DatasetIndex":
        """
        Loads gen<N>.js / gen<N>.json files from `directory`.

        With `generations` given, every listed generation must have a file;
        otherwise whatever known generations are present get loaded.
        """
        wanted = list(generations) if generations is not None else None
        collections = {}
        for gen in (wanted if wanted is not None else sorted(SETDEX_VARS)):
            path = _find_setdex_file(directory, gen)
            if path is None:
                if wanted is not None:
                    raise DataLoadError(
                        os.path.join(directory, f"gen{gen}.js"),
                        f"Setdex file for Generation {gen} not found",
                    )
                continue
            collection = parse_setdex_file(path, gen)
            log.info("Loaded %d species for generation %d from %s", len(collection), gen, path)
            collections[gen] = collection
        return cls(collections)

    @classmethod
    def from_database(cls, engine: Engine, generations: Optional[Iterable[int]] = None) -> "DatasetIndex":
        factory = make_session_factory(engine)
        collections = {}
        with session_scope(factory) as s:
            gens = list(generations) if generations is not None else list_generations(s)
            for gen in gens:
                collection = load_collection(s, gen)
                if not collection:
                    raise DataLoadError(str(engine.url), f"no presets stored for Generation {gen}")
                log.info("Loaded %d species for generation %d from database", len(collection), gen)
                collections[gen] = collection
        return cls(collections)

def _find_setdex_file(directory: str, generation: int) -> Optional[str]:
    for ext in ("js", "json"):
        path = os.path.join(directory, f"gen{generation}.{ext}")
        if os.path.exists(path):
            return path
    return None
