"""Flatten a capsule model into its instance slots."""

from dataclasses import dataclass, field
from typing import Iterator

from rtdiagram.models.model import Capsule, Model


@dataclass(eq=False)
class Slot:
    """One capsule instance in the flattened structure."""
    name: str
    capsule: Capsule
    index: int = 0
    children: list["Slot"] = field(default_factory=list)

    def walk(self) -> Iterator["Slot"]:
        """Yield this slot and every nested slot, depth-first."""
        yield self
        for child in self.children:
            yield from child.walk()


def flatten(model: Model) -> list[Slot]:
    """Build the instance slots of a model.

    When the model declares a top capsule, slots are expanded from it, one
    per part instance (parts are expanded by replication). Without a top
    capsule every capsule of the model and its imports is a candidate root.

    Returns:
        Flat list of all slots, parents before children
    """
    if model.top is not None:
        roots = [_expand(model.top.name, model.top, 0, ())]
    else:
        roots = [_expand(capsule.name, capsule, 0, ()) for capsule in model.all_capsules()]

    slots = []
    for root in roots:
        slots.extend(root.walk())
    return slots


def _expand(name: str, capsule: Capsule, index: int, ancestors: tuple) -> Slot:
    slot = Slot(name=name, capsule=capsule, index=index)
    # Guard against a capsule that contains itself through its parts
    if capsule in ancestors:
        return slot

    lineage = ancestors + (capsule,)
    for part in capsule.parts:
        for i in range(max(part.replication, 1)):
            slot.children.append(_expand(f"{name}.{part.name}", part.capsule, i, lineage))
    return slot
