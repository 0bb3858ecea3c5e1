from __future__ import annotations

import json
from typing import Dict, List, Mapping
from sqlalchemy import select, delete, distinct, func
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session
from .base import Base
from .models import TrainerPreset
from ..models.preset import Preset, PresetCollection

def init_db(engine: Engine):
    Base.metadata.create_all(bind=engine)

def _dumps(value) -> str | None:
    if value is None:
        return None
    if isinstance(value, Mapping):
        value = dict(value)
    return json.dumps(value, ensure_ascii=False)

def _loads(value: str | None):
    if value is None:
        return None
    return json.loads(value)

def save_collection(session: Session, generation: int, collection: PresetCollection) -> int:
    """Replaces every stored preset of `generation` with `collection`. Returns rows written."""
    session.execute(delete(TrainerPreset).where(TrainerPreset.generation == generation))
    position = 0
    for species, sets in collection.items():
        for set_name, preset in sets.items():
            session.add(TrainerPreset(
                generation=generation,
                species=species,
                set_name=set_name,
                position=position,
                level=preset.level,
                ability=preset.ability,
                item=preset.item,
                nature=preset.nature,
                trainer=preset.trainer,
                evs_json=_dumps(preset.evs),
                ivs_json=_dumps(preset.ivs),
                moves_json=_dumps(list(preset.moves) if preset.moves is not None else None),
            ))
            position += 1
    session.flush()
    return position

def load_collection(session: Session, generation: int) -> Dict[str, Dict[str, Preset]]:
    stmt = (
        select(TrainerPreset)
        .where(TrainerPreset.generation == generation)
        .order_by(TrainerPreset.position.asc(), TrainerPreset.id.asc())
    )
    collection: Dict[str, Dict[str, Preset]] = {}
    for row in session.scalars(stmt):
        moves = _loads(row.moves_json)
        collection.setdefault(row.species, {})[row.set_name] = Preset(
            name=row.set_name,
            level=row.level,
            ability=row.ability,
            item=row.item,
            nature=row.nature,
            ivs=_loads(row.ivs_json),
            evs=_loads(row.evs_json),
            moves=tuple(moves) if moves is not None else None,
            trainer=row.trainer,
        )
    return collection

def list_generations(session: Session) -> List[int]:
    stmt = select(distinct(TrainerPreset.generation)).order_by(TrainerPreset.generation.asc())
    return [int(g) for g in session.scalars(stmt)]

def count_presets(session: Session, generation: int | None = None) -> int:
    stmt = select(func.count(TrainerPreset.id))
    if generation is not None:
        stmt = stmt.where(TrainerPreset.generation == generation)
    return int(session.execute(stmt).scalar_one())
