from __future__ import annotations
from dataclasses import dataclass
from datetime import date
from typing import Literal

NoteKind = Literal["daily", "weekly"]

NOTE_KINDS: tuple[NoteKind, ...] = ("daily", "weekly")

# "{{woy}}" -> "5"
PlaceholderMap = dict[str, str]


@dataclass(frozen=True)
class WeekInfo:
    week_number: int  # 1..53
    week_start: date  # always a Monday


@dataclass(frozen=True)
class Resolution:
    path: str  # vault-relative, "/" separated
    created: bool  # False when an existing note was opened
    kind: NoteKind
    day: date
    week: WeekInfo
