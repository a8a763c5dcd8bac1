"""Structural model entities: packages, capsules, classes and their members.

Entities are plain dataclasses compared and hashed by identity, so the same
object can be used as a key in name lookups even when two elements share a
name. The generator only ever reads them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Iterator

if TYPE_CHECKING:
    from rtdiagram.models.statemachine import StateMachine


class VisibilityKind(str, Enum):
    """Member visibility kinds."""
    PUBLIC = "public"
    PROTECTED = "protected"
    PRIVATE = "private"
    PACKAGE = "package"


@dataclass(eq=False)
class PrimitiveType:
    """Built-in type such as ``int`` or ``bool``."""
    name: str


@dataclass(eq=False)
class Attribute:
    name: str
    type: PrimitiveType | RTClass
    replication: int = 1
    visibility: VisibilityKind = VisibilityKind.PUBLIC


@dataclass(eq=False)
class Parameter:
    name: str
    type: PrimitiveType | RTClass
    replication: int = 1


@dataclass(eq=False)
class Operation:
    name: str
    parameters: list[Parameter] = field(default_factory=list)
    return_type: PrimitiveType | RTClass | None = None
    visibility: VisibilityKind = VisibilityKind.PUBLIC


@dataclass(eq=False)
class RTClass:
    """Passive class with attributes and operations."""
    name: str
    attributes: list[Attribute] = field(default_factory=list)
    operations: list[Operation] = field(default_factory=list)


@dataclass(eq=False)
class Port:
    """Interaction point of a capsule."""
    name: str
    internal: bool = False
    protocol: str | None = None  # Protocol name, carried but not rendered
    replication: int = 1
    conjugated: bool = False


@dataclass(eq=False)
class Part:
    """Typed slot in a capsule instantiating another capsule."""
    name: str
    capsule: Capsule
    plugin: bool = False
    optional: bool = False
    replication: int = 1


@dataclass(eq=False)
class ConnectorEnd:
    port: Port
    part: Part | None = None  # None when the port belongs to the owning capsule


@dataclass(eq=False)
class Connector:
    """Undirected binding between two ports."""
    end1: ConnectorEnd
    end2: ConnectorEnd
    name: str | None = None


@dataclass(eq=False)
class Capsule(RTClass):
    """Active component type; also rendered as a class in class diagrams."""
    parts: list[Part] = field(default_factory=list)
    ports: list[Port] = field(default_factory=list)
    connectors: list[Connector] = field(default_factory=list)
    state_machine: StateMachine | None = None

    def external_ports(self) -> list[Port]:
        """Ports visible from outside the capsule."""
        return [port for port in self.ports if not port.internal]


@dataclass(eq=False)
class Package:
    name: str
    packages: list[Package] = field(default_factory=list)
    capsules: list[Capsule] = field(default_factory=list)
    classes: list[RTClass] = field(default_factory=list)

    def all_capsules(self) -> Iterator[Capsule]:
        """Capsules of this package and all nested packages, depth-first."""
        for package in self.packages:
            yield from package.all_capsules()
        yield from self.capsules


@dataclass(eq=False)
class Model:
    """Root of a model: imported sub-models and a root package."""
    name: str
    root: Package
    imports: list[Model] = field(default_factory=list)
    top: Capsule | None = None  # Top capsule used for instance flattening

    def all_capsules(self) -> Iterator[Capsule]:
        """Capsules of imported models, then of this model."""
        for imported in self.imports:
            yield from imported.all_capsules()
        yield from self.root.all_capsules()
