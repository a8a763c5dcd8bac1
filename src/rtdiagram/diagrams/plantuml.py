"""PlantUML renderer for class, composition and state machine diagrams.

The renderer only assembles brace-delimited blocks line by line; it never
indents. ``DiagramGenerator`` passes every document through ``reflow``
before writing it.
"""

from typing import Any, Mapping

from rtdiagram.config import DiagramsConfig
from rtdiagram.models.model import (
    Attribute,
    Capsule,
    Model,
    Operation,
    Package,
    Parameter,
    Part,
    Port,
    RTClass,
    VisibilityKind,
)
from rtdiagram.models.statemachine import (
    CompositeState,
    PseudoState,
    PseudoStateKind,
    SimpleState,
    State,
    Transition,
)

from .framework import DiagramRenderer

INITIAL_MARKER = "[*]"
HISTORY_MARKER = "[H*]"

VISIBILITY_SYMBOLS = {
    VisibilityKind.PUBLIC: "+",
    VisibilityKind.PROTECTED: "#",
    VisibilityKind.PACKAGE: "~",
}

# Every kind is listed; None means the pseudostate draws no box of its own.
PSEUDOSTATE_STEREOTYPES: dict[PseudoStateKind, str | None] = {
    PseudoStateKind.CHOICE: "choice",
    PseudoStateKind.JOIN: "join",
    PseudoStateKind.ENTRY_POINT: "entryPoint",
    PseudoStateKind.EXIT_POINT: "exitPoint",
    PseudoStateKind.INITIAL: None,  # drawn as [*] on its transitions
    PseudoStateKind.HISTORY: None,  # drawn as [H*] on its transitions
    PseudoStateKind.DEEP_HISTORY: None,
    PseudoStateKind.FORK: None,
    PseudoStateKind.JUNCTION: None,
    PseudoStateKind.TERMINATE: None,
}


def visibility_symbol(visibility: VisibilityKind | None) -> str:
    """Map a visibility kind to its UML prefix, defaulting to public."""
    return VISIBILITY_SYMBOLS.get(visibility, "+")


def replication_suffix(replication: int) -> str:
    return f"[{replication}]" if replication > 1 else ""


class PlantUMLRenderer(DiagramRenderer):
    """Render model elements as PlantUML sources."""

    def __init__(self, names: Mapping[Any, str], settings: DiagramsConfig | None = None):
        self.names = names
        self.settings = settings or DiagramsConfig()

    @property
    def format_name(self) -> str:
        return "plantuml"

    # Documents

    def render_class_diagram(self, model: Model) -> str:
        """Class diagram covering the model, its imports and all packages."""
        return self._document(model.name, [self._model_classes(model)])

    def render_composition(self, capsule: Capsule) -> str:
        """Composite structure of one capsule: parts, ports and connectors."""
        lines = [f"component {capsule.name} {{"]
        lines.extend(self.render_part(part) for part in capsule.parts)
        lines.extend(self.render_port(port) for port in capsule.ports)
        lines.extend(
            f"{self.names[connector.end1.port]} -u0)- {self.names[connector.end2.port]}"
            for connector in capsule.connectors
        )
        lines.append("}")
        return self._document(f"{capsule.name}-composition", lines)

    def render_state_machine(self, capsule: Capsule) -> str:
        """State machine of one capsule; the capsule must declare one."""
        machine = capsule.state_machine
        return self._document(
            f"{capsule.name}-statemachine",
            [self.render_states(machine.states), self.render_transitions(machine.transitions)],
        )

    def _document(self, title: str, body: list[str]) -> str:
        lines = [f"@startuml {title}"]
        lines.extend(f"skinparam {param}" for param in self.settings.skinparams)
        lines.extend(body)
        lines.append("@enduml")
        return "\n".join(lines)

    # Class diagram

    def _model_classes(self, model: Model) -> str:
        lines = [self._model_classes(imported) for imported in model.imports]
        lines.append(self.render_package(model.root))
        return "\n".join(lines)

    def render_package(self, package: Package) -> str:
        lines = [f"package {package.name} <<Folder>> {{"]
        lines.extend(self.render_class(capsule) for capsule in package.capsules)
        lines.extend(self.render_class(cls) for cls in package.classes)
        lines.extend(self.render_package(nested) for nested in package.packages)
        lines.append("}")
        return "\n".join(lines)

    def render_class(self, cls: RTClass) -> str:
        lines = [f"class {cls.name} {{"]
        lines.extend(self.render_attribute(attribute) for attribute in cls.attributes)
        lines.extend(self.render_operation(operation) for operation in cls.operations)
        lines.append("}")
        return "\n".join(lines)

    def render_attribute(self, attribute: Attribute) -> str:
        return (
            f"{visibility_symbol(attribute.visibility)}{attribute.name}: "
            f"{attribute.type.name}{replication_suffix(attribute.replication)}"
        )

    def render_operation(self, operation: Operation) -> str:
        parameters = ", ".join(self.render_parameter(p) for p in operation.parameters)
        returns = f": {operation.return_type.name}" if operation.return_type is not None else ""
        return f"{visibility_symbol(operation.visibility)}{operation.name}({parameters}){returns}"

    def render_parameter(self, parameter: Parameter) -> str:
        return f"{parameter.name}: {parameter.type.name}{replication_suffix(parameter.replication)}"

    # Composition diagram

    def render_part(self, part: Part) -> str:
        if part.plugin:
            header = f"component {part.name} #line.dashed {{"
        elif part.optional:
            header = f"component {part.name} #lightgray {{"
        else:
            header = f"component {part.name} {{"

        lines = [header]
        lines.extend(self.render_port(port) for port in part.capsule.external_ports())
        lines.append("}")
        return "\n".join(lines)

    def render_port(self, port: Port) -> str:
        return f'port "{port.name}" as {self.names[port]}'

    # State machine diagram

    def render_states(self, states: list[State]) -> str:
        return "\n".join(self.render_state(state) for state in states)

    def render_state(self, state: State) -> str:
        if isinstance(state, PseudoState):
            return self.render_pseudostate(state)
        elif isinstance(state, CompositeState):
            return self.render_composite_state(state)
        elif isinstance(state, SimpleState):
            return f'state "{state.name}" as {self.names[state]}'
        else:
            raise TypeError(f"Unsupported state type: {type(state).__name__}")

    def render_composite_state(self, state: CompositeState) -> str:
        return "\n".join([
            f'state "{state.name}" as {self.names[state]} {{',
            self.render_states(state.states),
            self.render_transitions(state.transitions),
            "}",
        ])

    def render_pseudostate(self, state: PseudoState) -> str:
        stereotype = PSEUDOSTATE_STEREOTYPES.get(state.kind)
        if stereotype is None:
            return ""
        return f"state {self.names[state]} <<{stereotype}>>"

    def render_transitions(self, transitions: list[Transition]) -> str:
        return "\n".join(self.render_transition(t) for t in transitions)

    def render_transition(self, transition: Transition) -> str:
        source = INITIAL_MARKER if transition.starts_at_initial() else self.names[transition.source]
        target = HISTORY_MARKER if transition.ends_in_history() else self.names[transition.target]
        return f"{source} --> {target}{self.render_label(transition)}"

    def render_label(self, transition: Transition) -> str:
        parts = []
        if transition.triggers:
            parts.append(",".join(trigger.signal.name for trigger in transition.triggers))
        if self.settings.emit_guards and transition.guard is not None:
            parts.append(f"[{transition.guard.body}]")
        return f" : {' '.join(parts)}" if parts else ""
