"""Domain Types - rich types that replace bare primitives across the codebase.

Invariants:
    - SurvivorId and ItemId wrap ints: never pass a bare int where an id is meant
    - INFECTION_THRESHOLD is fixed at 5 distinct accusers
    - All valid states encoded as Enums, no raw string matching
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

SurvivorId = NewType("SurvivorId", int)
ItemId = NewType("ItemId", int)


# ─── Value Types ─────────────────────────────────────────────────

Quantity = NewType("Quantity", int)   # > 0 in offers, >= 0 in the ledger
Points = NewType("Points", int)       # >= 0

INFECTION_THRESHOLD = 5


# ─── Enums ───────────────────────────────────────────────────────

class Gender(str, Enum):
    """Genders accepted at registration, maps to the `gender` column."""
    MALE = "male"
    FEMALE = "female"
    NON_BINARY = "non-binary"
    GENDERQUEER = "genderqueer"
    GENDERFLUID = "genderfluid"
    AGENDER = "agender"
    BIGENDER = "bigender"
    UNDISCLOSED = "undisclosed"
    OTHER = "other"
