"""Shared model fixtures for rtdiagram tests."""

import pytest

from rtdiagram.models import (
    Attribute,
    Capsule,
    CompositeState,
    Connector,
    ConnectorEnd,
    Guard,
    Model,
    Operation,
    Package,
    Parameter,
    Part,
    Port,
    PrimitiveType,
    PseudoState,
    PseudoStateKind,
    RTClass,
    Signal,
    SimpleState,
    StateMachine,
    Transition,
    Trigger,
    VisibilityKind,
)

INT = PrimitiveType("int")
BOOL = PrimitiveType("bool")


def build_sensor() -> Capsule:
    """Leaf capsule with one external and one internal port."""
    return Capsule(
        name="Sensor",
        ports=[Port("reading"), Port("log", internal=True)],
        attributes=[Attribute("samples", INT, replication=4, visibility=VisibilityKind.PRIVATE)],
    )


def build_controller(sensor: Capsule) -> Capsule:
    """Capsule with parts, ports, connectors and a nested state machine."""
    primary = Part("primary", sensor)
    backup = Part("backup", sensor, optional=True)
    probe = Part("probe", sensor, plugin=True, replication=2)
    control = Port("control")
    status = Port("status")

    initial = PseudoState(PseudoStateKind.INITIAL)
    idle = SimpleState("Idle")
    inner_initial = PseudoState(PseudoStateKind.INITIAL)
    sampling = SimpleState("Sampling")
    history = PseudoState(PseudoStateKind.HISTORY)
    running = CompositeState(
        name="Running",
        states=[inner_initial, sampling, history],
        transitions=[Transition(inner_initial, sampling)],
    )
    decide = PseudoState(PseudoStateKind.CHOICE, name="decide")
    junction = PseudoState(PseudoStateKind.JUNCTION, name="merge")

    machine = StateMachine(root=CompositeState(
        name="top",
        states=[initial, idle, running, decide, junction],
        transitions=[
            Transition(initial, idle),
            Transition(idle, running, triggers=[Trigger(Signal("start"))]),
            Transition(running, decide, triggers=[Trigger(Signal("stop")), Trigger(Signal("abort"))]),
            Transition(decide, idle, guard=Guard("ready")),
            Transition(idle, history, triggers=[Trigger(Signal("resume"))]),
        ],
    ))

    return Capsule(
        name="Controller",
        parts=[primary, backup, probe],
        ports=[control, status],
        connectors=[
            Connector(ConnectorEnd(control), ConnectorEnd(status)),
            Connector(ConnectorEnd(status), ConnectorEnd(sensor.ports[0], part=primary)),
        ],
        state_machine=machine,
        operations=[
            Operation("configure", [Parameter("gain", INT), Parameter("flags", BOOL, replication=3)],
                      return_type=BOOL),
        ],
    )


def build_sample_model() -> Model:
    """Two-level package tree with two capsules and one plain class."""
    sensor = build_sensor()
    controller = build_controller(sensor)
    settings = RTClass(
        name="Settings",
        attributes=[
            Attribute("threshold", INT, visibility=VisibilityKind.PROTECTED),
            Attribute("enabled", BOOL, visibility=VisibilityKind.PACKAGE),
        ],
        operations=[Operation("reset")],
    )
    devices = Package("Devices", capsules=[sensor])
    root = Package("Demo", packages=[devices], capsules=[controller], classes=[settings])
    return Model(name="Demo", root=root, top=controller)


@pytest.fixture
def sample_model():
    """Sample model with nested packages, parts and a state machine."""
    return build_sample_model()


@pytest.fixture
def empty_model():
    """Model with packages and classes but no capsules."""
    root = Package("Empty", packages=[Package("Nested")], classes=[RTClass("Lonely")])
    return Model(name="Empty", root=root)
