from __future__ import annotations
from datetime import datetime
from sqlalchemy import Integer, String, DateTime, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from .base import Base

class TrainerPreset(Base):
    __tablename__ = "trainer_presets"
    __table_args__ = (
        UniqueConstraint("generation", "species", "set_name", name="uq_preset_gen_species_set"),
    )
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    generation: Mapped[int] = mapped_column(Integer, index=True)
    species: Mapped[str] = mapped_column(String(64), index=True)
    set_name: Mapped[str] = mapped_column(String(128))
    # declaration order inside the source file; trainer matching depends on it
    position: Mapped[int] = mapped_column(Integer)

    level: Mapped[int | None] = mapped_column(Integer, nullable=True)
    ability: Mapped[str | None] = mapped_column(String(128), nullable=True)
    item: Mapped[str | None] = mapped_column(String(128), nullable=True)
    nature: Mapped[str | None] = mapped_column(String(32), nullable=True)
    trainer: Mapped[str | None] = mapped_column(String(128), nullable=True)

    evs_json: Mapped[str | None] = mapped_column(Text, nullable=True)
    ivs_json: Mapped[str | None] = mapped_column(Text, nullable=True)
    moves_json: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
