"""Public package surface for layertree.

Exports the layer model, snapshot type, edit requests, and ``transition``.
``main`` lazily imports the replay CLI.
"""

from __future__ import annotations

from .errors import LayerNotFoundError
from .layers import Layer, LayerKind, new_group, new_leaf, new_root
from .state import (
    AddLayers,
    ClearLayerSelections,
    DeleteSelectedLayers,
    LayerState,
    ReplaceLayer,
    SelectLayer,
    SetActiveRoot,
    ToggleLayerExpansion,
    ToggleLayerVisibility,
    build_initial_state,
    transition,
)


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)


__all__ = [
    "LayerNotFoundError",
    "Layer",
    "LayerKind",
    "new_root",
    "new_group",
    "new_leaf",
    "LayerState",
    "build_initial_state",
    "transition",
    "AddLayers",
    "ClearLayerSelections",
    "ToggleLayerExpansion",
    "ToggleLayerVisibility",
    "ReplaceLayer",
    "DeleteSelectedLayers",
    "SelectLayer",
    "SetActiveRoot",
    "main",
]
