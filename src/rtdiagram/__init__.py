"""rtdiagram - PlantUML diagram generator for real-time structural models.

rtdiagram walks a model of packages, capsules, ports, connectors and
hierarchical state machines and writes class, composition and state
machine diagrams as PlantUML sources into a directory tree.
"""

__version__ = "0.1.0"
__description__ = "PlantUML diagram generator for capsule models"

from rtdiagram.config import RtDiagramConfig
from rtdiagram.diagrams.generator import generate

__all__ = [
    "__version__",
    "__description__",
    "RtDiagramConfig",
    "generate",
]
