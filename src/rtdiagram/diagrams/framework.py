"""Renderer interface for diagram formats."""

from abc import ABC, abstractmethod

from rtdiagram.models.model import Capsule, Model


class DiagramRenderer(ABC):
    """Abstract base class for diagram renderers.

    Renderers return raw sources; indentation is applied afterwards by
    ``reflow``.
    """

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Name of the output format."""
        pass

    @abstractmethod
    def render_class_diagram(self, model: Model) -> str:
        pass

    @abstractmethod
    def render_composition(self, capsule: Capsule) -> str:
        pass

    @abstractmethod
    def render_state_machine(self, capsule: Capsule) -> str:
        pass
