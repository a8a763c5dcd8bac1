"""Diagram emission for rtdiagram.

Renders class, composition and state machine diagrams as PlantUML and
normalizes their indentation with ``reflow``.
"""

from .framework import DiagramRenderer
from .generator import DiagramGenerator, generate
from .models import DiagramDocument, DiagramKind
from .plantuml import PlantUMLRenderer
from .reflow import reflow

__all__ = [
    "DiagramRenderer",
    "DiagramGenerator",
    "DiagramDocument",
    "DiagramKind",
    "PlantUMLRenderer",
    "generate",
    "reflow",
]
