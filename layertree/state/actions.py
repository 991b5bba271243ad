"""Edit requests accepted by ``layertree.state.reducer.transition``."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

from ..layers import Layer


@dataclass(frozen=True)
class AddLayers:
    """Append roots to the forest and other layers to the active root."""

    layers: tuple[Layer, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not isinstance(self.layers, tuple):
            object.__setattr__(self, "layers", tuple(self.layers))


@dataclass(frozen=True)
class ClearLayerSelections:
    pass


@dataclass(frozen=True)
class ToggleLayerExpansion:
    layer_id: str
    recursive: bool = False


@dataclass(frozen=True)
class ToggleLayerVisibility:
    layer_id: str


@dataclass(frozen=True)
class ReplaceLayer:
    """Swap in ``layer`` for the existing layer that shares its id."""

    layer: Layer


@dataclass(frozen=True)
class DeleteSelectedLayers:
    pass


@dataclass(frozen=True)
class SelectLayer:
    """Select ``layer_id``, optionally toggling it or keeping the existing selection."""

    layer_id: str
    should_toggle: bool = False
    clear_existing: bool = True


@dataclass(frozen=True)
class SetActiveRoot:
    root_id: str


LayerAction = Union[
    AddLayers,
    ClearLayerSelections,
    ToggleLayerExpansion,
    ToggleLayerVisibility,
    ReplaceLayer,
    DeleteSelectedLayers,
    SelectLayer,
    SetActiveRoot,
]


__all__ = [
    "AddLayers",
    "ClearLayerSelections",
    "ToggleLayerExpansion",
    "ToggleLayerVisibility",
    "ReplaceLayer",
    "DeleteSelectedLayers",
    "SelectLayer",
    "SetActiveRoot",
    "LayerAction",
]
