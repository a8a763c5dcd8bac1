"""Qualified-name resolution for cross-referenced model elements.

Ports and states are referenced from several places in a diagram (port
markers, connector lines, transition ends), so each one gets a single
diagram-safe token for the whole generation pass.
"""

import logging
import re
from typing import Any

from rtdiagram.models.model import Capsule, Model, Package
from rtdiagram.models.statemachine import CompositeState, PseudoState, State

logger = logging.getLogger(__name__)

SEPARATOR = "__"


def safe_token(qualified_name: str) -> str:
    """Reduce a qualified name to an identifier safe for diagram aliases."""
    token = re.sub(r"[^a-zA-Z0-9_]", "_", qualified_name)
    if not token or token[0].isdigit():
        token = f"_{token}"
    return token


class QualifiedNameResolver:
    """Assign every port and state of a model a unique token.

    Tokens are built from the owner chain (packages, capsule,
    enclosing composite states) so they read naturally in the generated
    sources. A numeric suffix is appended when two qualified names reduce
    to the same token.
    """

    def __init__(self, model: Model):
        self.model = model
        self._names: dict[Any, str] = {}
        self._taken: set[str] = set()

    def resolve(self) -> dict[Any, str]:
        """Resolve names for the model and its imports.

        Returns:
            Mapping from element (by identity) to token
        """
        if not self._names:
            self._resolve_model(self.model)
            logger.debug(f"Resolved {len(self._names)} qualified names for model {self.model.name}")
        return self._names

    def _resolve_model(self, model: Model) -> None:
        for imported in model.imports:
            self._resolve_model(imported)
        self._resolve_package(model.root, [])

    def _resolve_package(self, package: Package, prefix: list[str]) -> None:
        path = prefix + [package.name]
        for nested in package.packages:
            self._resolve_package(nested, path)
        for capsule in package.capsules:
            self._resolve_capsule(capsule, path)

    def _resolve_capsule(self, capsule: Capsule, prefix: list[str]) -> None:
        path = prefix + [capsule.name]
        for port in capsule.ports:
            self._assign(port, path + [port.name])
        if capsule.state_machine is not None:
            self._resolve_states(capsule.state_machine.states, path)

    def _resolve_states(self, states: list[State], prefix: list[str]) -> None:
        for state in states:
            if isinstance(state, PseudoState):
                name = state.name or state.kind.value
            else:
                name = state.name
            self._assign(state, prefix + [name])
            if isinstance(state, CompositeState):
                self._resolve_states(state.states, prefix + [name])

    def _assign(self, element: Any, path: list[str]) -> None:
        if element in self._names:
            return

        base = safe_token(SEPARATOR.join(path))
        token = base
        counter = 2
        while token in self._taken:
            token = f"{base}_{counter}"
            counter += 1

        self._taken.add(token)
        self._names[element] = token


def resolve_names(model: Model) -> dict[Any, str]:
    """Convenience wrapper returning the token lookup for a model."""
    return QualifiedNameResolver(model).resolve()
