"""Immutable editor snapshot combining the layer forest and per-layer flags."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..errors import LayerNotFoundError
from ..layers import Layer, new_root, walk_layers


@dataclass(frozen=True)
class LayerState:
    """One snapshot of layer-tree state.

    ``roots`` is ordered (first root is the fallback active root and the
    bottom of the render stack). The three id sets are independent flags and
    may briefly reference ids that no longer exist.
    """

    roots: tuple[Layer, ...]
    active_root_id: str
    selected_ids: frozenset[str] = field(default_factory=frozenset)
    collapsed_ids: frozenset[str] = field(default_factory=frozenset)
    hidden_ids: frozenset[str] = field(default_factory=frozenset)


def build_initial_state(root_name: str = "Layer", root_id: str | None = None) -> LayerState:
    """Return the session-start snapshot: one empty active root, no flags."""
    root = new_root(root_name, layer_id=root_id)
    return LayerState(roots=(root,), active_root_id=root.id)


def root_index(state: LayerState, root_id: str) -> int:
    """Return the position of ``root_id`` in ``state.roots`` or ``-1``."""
    for idx, root in enumerate(state.roots):
        if root.id == root_id:
            return idx
    return -1


def active_root(state: LayerState) -> Layer:
    idx = root_index(state, state.active_root_id)
    if idx < 0:
        raise LayerNotFoundError(state.active_root_id, f"active root not found: {state.active_root_id!r}")
    return state.roots[idx]


def check_state_invariants(state: LayerState) -> None:
    """Raise if ``state`` violates a structural invariant.

    Checks: at least one root, every top-level node is a root, the active
    root exists, and no id appears twice anywhere in the forest.
    """
    if not state.roots:
        raise ValueError("layer state has no roots")
    seen: set[str] = set()
    for root in state.roots:
        if not root.is_root:
            raise ValueError(f"top-level layer {root.id!r} is not a root")
        for layer in walk_layers(root):
            if layer.id in seen:
                raise ValueError(f"duplicate layer id {layer.id!r}")
            seen.add(layer.id)
    active_root(state)


__all__ = [
    "LayerState",
    "build_initial_state",
    "root_index",
    "active_root",
    "check_state_invariants",
]
