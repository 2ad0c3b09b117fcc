"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - TopicId, ReplyId wrap storage-assigned integers — never reuse a bare int for both
    - Timestamp is Unix seconds (int), assigned once at insert
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

TopicId = NewType("TopicId", int)
ReplyId = NewType("ReplyId", int)
Username = NewType("Username", str)


# ─── Value Types ─────────────────────────────────────────────────

Timestamp = NewType("Timestamp", int)   # Unix seconds


# ─── Enums ───────────────────────────────────────────────────────

class AuthState(str, Enum):
    """Per-request authentication state. Only two states, no expiry."""
    ANONYMOUS = "anonymous"
    AUTHENTICATED = "authenticated"


class FlashCategory(str, Enum):
    """One-shot notice categories shown on the next rendered view."""
    ERROR = "error"
    INFO = "info"
