"""Brace scope tracking for loop awareness."""

from __future__ import annotations

from dataclasses import dataclass
from re import ASCII, compile

LOOP_INTRODUCER_RE = compile(r"\bfor\s+each\b", ASCII)


@dataclass(frozen=True, slots=True)
class ScopeFrame:
    """One brace-delimited block, tagged when it was opened by a loop."""

    is_loop: bool


@dataclass(frozen=True, slots=True)
class ScopeState:
    """Open frames plus whether a loop keyword is waiting for its ``{``."""

    frames: tuple[ScopeFrame, ...] = ()
    pending_loop: bool = False

    @property
    def depth(self) -> int:
        return len(self.frames)

    @property
    def is_inside_loop(self) -> bool:
        """True when any open frame belongs to a loop body."""
        return any(frame.is_loop for frame in self.frames)


def advance_scope(state: ScopeState, text: str) -> ScopeState:
    """Return the scope state after consuming one line of code.

    The loop keyword is checked before braces so ``for each x in xs {`` opens a
    loop frame on the same line. A closing brace with nothing open is ignored.
    """
    frames = list(state.frames)
    pending_loop = state.pending_loop or LOOP_INTRODUCER_RE.search(text) is not None

    for char in text:
        if char == "{":
            frames.append(ScopeFrame(is_loop=pending_loop))
            pending_loop = False
        elif char == "}" and frames:
            frames.pop()

    return ScopeState(frames=tuple(frames), pending_loop=pending_loop)
