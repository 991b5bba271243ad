"""Layer node datatypes shared by tree primitives and the reducer."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from enum import Enum


class LayerKind(str, Enum):
    """Explicit discriminant for layer nodes."""

    ROOT = "root"
    GROUP = "group"
    LEAF = "leaf"


def new_layer_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class Layer:
    """One immutable node in a vector-layer tree.

    ``children`` is a tuple so a layer can be shared by reference between
    successive snapshots without risk of mutation.
    """

    id: str
    kind: LayerKind
    name: str = ""
    children: tuple[Layer, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not isinstance(self.kind, LayerKind):
            object.__setattr__(self, "kind", LayerKind(self.kind))
        if not isinstance(self.children, tuple):
            object.__setattr__(self, "children", tuple(self.children))
        if self.kind is LayerKind.LEAF and self.children:
            raise ValueError(f"leaf layer {self.id!r} cannot have children")

    @property
    def is_root(self) -> bool:
        return self.kind is LayerKind.ROOT

    @property
    def is_container(self) -> bool:
        return self.kind is not LayerKind.LEAF

    def clone(self, **changes: object) -> Layer:
        """Return a shallow copy; unchanged children are shared by reference."""
        return replace(self, **changes)

    def with_children(self, children: tuple[Layer, ...] | list[Layer]) -> Layer:
        return self.clone(children=tuple(children))


def new_root(name: str = "Layer", children: tuple[Layer, ...] | list[Layer] = (), layer_id: str | None = None) -> Layer:
    """Create a top-level vector layer with a fresh id."""
    return Layer(layer_id or new_layer_id(), LayerKind.ROOT, name, tuple(children))


def new_group(name: str = "Group", children: tuple[Layer, ...] | list[Layer] = (), layer_id: str | None = None) -> Layer:
    return Layer(layer_id or new_layer_id(), LayerKind.GROUP, name, tuple(children))


def new_leaf(name: str = "Path", layer_id: str | None = None) -> Layer:
    return Layer(layer_id or new_layer_id(), LayerKind.LEAF, name)


__all__ = [
    "Layer",
    "LayerKind",
    "new_layer_id",
    "new_root",
    "new_group",
    "new_leaf",
]
