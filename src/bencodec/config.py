"""
Limits applied by the decoder to untrusted input.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

__all__ = ["DuplicateKeyPolicy", "DecoderLimits", "DEFAULT_LIMITS", "DEFAULT_MAX_DEPTH"]


class DuplicateKeyPolicy(Enum):
    """What the decoder does when a dictionary repeats a key."""
    LAST_WINS = "last_wins"
    REJECT = "reject"


# Two stack frames per level keeps this well under the interpreter's recursion limit
DEFAULT_MAX_DEPTH = 256


@dataclass(frozen=True)
class DecoderLimits:
    """
    Ceilings for a single decode. None disables a limit.

    max_depth          deepest nesting of lists/dicts. With None, input deeper
                       than the interpreter stack raises NestingTooDeepError, and
                       encoding such a tree raises ValueTooDeepError.
    max_string_length  largest declared byte-string length
    max_buffer_size    largest input buffer accepted
    duplicate_keys     how repeated dictionary keys are resolved
    """
    max_depth: Optional[int] = DEFAULT_MAX_DEPTH
    max_string_length: Optional[int] = None
    max_buffer_size: Optional[int] = None
    duplicate_keys: DuplicateKeyPolicy = DuplicateKeyPolicy.LAST_WINS

    def __post_init__(self):
        for name in ("max_depth", "max_string_length", "max_buffer_size"):
            limit = getattr(self, name)
            if limit is None:
                continue
            if isinstance(limit, bool) or not isinstance(limit, int):
                raise TypeError(f"{name} must be an int or None")
            if limit < 1 and name == "max_depth":
                raise ValueError("max_depth must be at least 1")
            if limit < 0:
                raise ValueError(f"{name} must not be negative")

        if not isinstance(self.duplicate_keys, DuplicateKeyPolicy):
            raise TypeError("duplicate_keys must be a DuplicateKeyPolicy")


DEFAULT_LIMITS = DecoderLimits()
