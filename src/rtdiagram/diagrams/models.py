"""Diagram document descriptors."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class DiagramKind(str, Enum):
    """Kinds of documents produced per run."""
    CLASS = "class"
    COMPOSITION = "composition"
    STATE_MACHINE = "statemachine"


@dataclass
class DiagramDocument:
    """A written document and where it landed."""
    kind: DiagramKind
    title: str  # Name carried by the start marker
    path: Path
