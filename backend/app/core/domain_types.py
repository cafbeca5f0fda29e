"""Domain Types — rich types and bounds shared by the store and the API boundary.

Invariants:
    - TodoId wraps int — ids are positive and assigned by the store only
    - StatusFilter encodes every valid list filter — no raw string matching
    - Field bounds live here so schemas and store agree on one number

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enum: serializes to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

TodoId = NewType("TodoId", int)

# Cache key: (status, text)
QueryKey = tuple[str, str]


# ─── Enums ───────────────────────────────────────────────────────

class StatusFilter(str, Enum):
    """List filter by completion state."""
    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"


# ─── Bounds ──────────────────────────────────────────────────────

MAX_TITLE_LENGTH = 200
MAX_DESCRIPTION_LENGTH = 1000
MAX_QUERY_LENGTH = 100
MAX_TODO_ID = 2**53 - 1         # largest id a JSON client can represent exactly
MAX_BULK_IDS = 1000
DEFAULT_QUERY_CACHE_SIZE = 50

UPDATABLE_FIELDS = frozenset({"title", "description", "completed"})
