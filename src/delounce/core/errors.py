# src/delounce/core/errors.py

from __future__ import annotations


class DelounceError(Exception):
    """Base class for every error raised by delounce itself."""


class InvalidArgumentError(DelounceError, ValueError):
    """
    Malformed input: empty queue name, missing debounce field, negative bound...

    Always raised synchronously, at the call site.
    """


class NotFoundError(DelounceError, KeyError):
    """A debounce name was used before create_debounce_reaction() registered it."""

    def __str__(self) -> str:
        # KeyError repr-quotes its message; keep it readable.
        return str(self.args[0]) if self.args else ""


class PollCancelled(DelounceError):
    """Failure outcome of a poll completion after PollHandle.cancel()."""
