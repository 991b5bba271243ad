"""Layer-tree snapshots, edit requests, and the transition function."""

from __future__ import annotations

from .actions import (
    AddLayers,
    ClearLayerSelections,
    DeleteSelectedLayers,
    LayerAction,
    ReplaceLayer,
    SelectLayer,
    SetActiveRoot,
    ToggleLayerExpansion,
    ToggleLayerVisibility,
)
from .reducer import transition
from .snapshot import LayerState, active_root, build_initial_state, check_state_invariants, root_index

__all__ = [
    "LayerState",
    "build_initial_state",
    "active_root",
    "root_index",
    "check_state_invariants",
    "transition",
    "LayerAction",
    "AddLayers",
    "ClearLayerSelections",
    "ToggleLayerExpansion",
    "ToggleLayerVisibility",
    "ReplaceLayer",
    "DeleteSelectedLayers",
    "SelectLayer",
    "SetActiveRoot",
]
