"""State machine entities.

States form a closed set of variants: ``SimpleState``, ``CompositeState``
and ``PseudoState``. Renderers match on all three explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from rtdiagram.models.model import Port


class PseudoStateKind(str, Enum):
    """Pseudostate kinds."""
    INITIAL = "initial"
    CHOICE = "choice"
    JOIN = "join"
    FORK = "fork"
    JUNCTION = "junction"
    HISTORY = "history"
    DEEP_HISTORY = "deep_history"
    ENTRY_POINT = "entry_point"
    EXIT_POINT = "exit_point"
    TERMINATE = "terminate"


@dataclass(eq=False)
class Signal:
    name: str


@dataclass(eq=False)
class Trigger:
    signal: Signal
    ports: list[Port] = field(default_factory=list)


@dataclass(eq=False)
class Guard:
    body: str


@dataclass(eq=False)
class SimpleState:
    name: str


@dataclass(eq=False)
class PseudoState:
    kind: PseudoStateKind
    name: str = ""


@dataclass(eq=False)
class CompositeState:
    """State owning a nested region of states and transitions."""
    name: str
    states: list[State] = field(default_factory=list)
    transitions: list[Transition] = field(default_factory=list)


State = Union[SimpleState, CompositeState, PseudoState]


@dataclass(eq=False)
class Transition:
    source: State
    target: State
    triggers: list[Trigger] = field(default_factory=list)
    guard: Guard | None = None
    name: str | None = None

    def starts_at_initial(self) -> bool:
        return isinstance(self.source, PseudoState) and self.source.kind == PseudoStateKind.INITIAL

    def ends_in_history(self) -> bool:
        return isinstance(self.target, PseudoState) and self.target.kind == PseudoStateKind.HISTORY


@dataclass(eq=False)
class StateMachine:
    """Behaviour of a capsule, held as a root composite region."""
    root: CompositeState = field(default_factory=lambda: CompositeState(name="top"))

    @property
    def states(self) -> list[State]:
        return self.root.states

    @property
    def transitions(self) -> list[Transition]:
        return self.root.transitions
