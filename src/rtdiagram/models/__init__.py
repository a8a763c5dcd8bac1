"""Model entities consumed by the diagram generator."""

from rtdiagram.models.flatten import Slot, flatten
from rtdiagram.models.model import (
    Attribute,
    Capsule,
    Connector,
    ConnectorEnd,
    Model,
    Operation,
    Package,
    Parameter,
    Part,
    Port,
    PrimitiveType,
    RTClass,
    VisibilityKind,
)
from rtdiagram.models.statemachine import (
    CompositeState,
    Guard,
    PseudoState,
    PseudoStateKind,
    Signal,
    SimpleState,
    State,
    StateMachine,
    Transition,
    Trigger,
)

__all__ = [
    "Attribute",
    "Capsule",
    "CompositeState",
    "Connector",
    "ConnectorEnd",
    "Guard",
    "Model",
    "Operation",
    "Package",
    "Parameter",
    "Part",
    "Port",
    "PrimitiveType",
    "PseudoState",
    "PseudoStateKind",
    "RTClass",
    "Signal",
    "SimpleState",
    "Slot",
    "State",
    "StateMachine",
    "Transition",
    "Trigger",
    "VisibilityKind",
    "flatten",
]
