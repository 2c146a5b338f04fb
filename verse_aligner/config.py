from __future__ import annotations

import os
from functools import lru_cache
from typing import Tuple

from pydantic import BaseModel, Field


def _split_env(name: str, default: str) -> Tuple[str, ...]:
    raw = os.getenv(name, default)
    return tuple(part.strip() for part in raw.split(",") if part.strip())


class AlignerSettings(BaseModel):
    word_tag: str = Field(default="w", min_length=1)
    milestone_tag: str = Field(default="zaln", min_length=1)
    milestone_drop_fields: Tuple[str, ...] = ("tw",)
    note_markers: Tuple[str, ...] = ("f", "fe", "x")


@lru_cache
def get_settings() -> AlignerSettings:
    return AlignerSettings(
        word_tag=os.getenv("VERSE_ALIGNER_WORD_TAG", "w"),
        milestone_tag=os.getenv("VERSE_ALIGNER_MILESTONE_TAG", "zaln"),
        milestone_drop_fields=_split_env("VERSE_ALIGNER_MILESTONE_DROP_FIELDS", "tw"),
        note_markers=_split_env("VERSE_ALIGNER_NOTE_MARKERS", "f,fe,x"),
    )
