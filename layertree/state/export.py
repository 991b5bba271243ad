"""JSON-ready conversions for debugging snapshots and replaying edit scripts.

``snapshot_to_dict`` is a one-way debug export. ``action_from_step`` decodes
one step of a replay script into an edit request.
"""

from __future__ import annotations

from collections.abc import Mapping

from ..layers import Layer, LayerKind, new_layer_id
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
from .snapshot import LayerState


class StepFormatError(ValueError):
    """A replay step is not a well-formed edit request."""


def layer_to_dict(layer: Layer) -> dict[str, object]:
    data: dict[str, object] = {"id": layer.id, "kind": layer.kind.value, "name": layer.name}
    if layer.is_container:
        data["children"] = [layer_to_dict(child) for child in layer.children]
    return data


def snapshot_to_dict(state: LayerState) -> dict[str, object]:
    """Export ``state`` with id sets sorted so output is stable."""
    return {
        "roots": [layer_to_dict(root) for root in state.roots],
        "active_root_id": state.active_root_id,
        "selected_ids": sorted(state.selected_ids),
        "collapsed_ids": sorted(state.collapsed_ids),
        "hidden_ids": sorted(state.hidden_ids),
    }


def layer_from_dict(data: object) -> Layer:
    """Build a layer from ``{"kind", "name"?, "id"?, "children"?}``.

    Missing ids are generated.
    """
    if not isinstance(data, Mapping):
        raise StepFormatError(f"layer must be an object, got {type(data).__name__}")
    try:
        kind = LayerKind(data.get("kind"))
    except ValueError as exc:
        raise StepFormatError(f"unknown layer kind: {data.get('kind')!r}") from exc
    layer_id = data.get("id")
    if layer_id is None:
        layer_id = new_layer_id()
    elif not isinstance(layer_id, str) or not layer_id:
        raise StepFormatError(f"layer id must be a non-empty string: {layer_id!r}")
    name = data.get("name", "")
    if not isinstance(name, str):
        raise StepFormatError(f"layer name must be a string: {name!r}")
    raw_children = data.get("children", [])
    if not isinstance(raw_children, list):
        raise StepFormatError("layer children must be a list")
    children = tuple(layer_from_dict(child) for child in raw_children)
    try:
        return Layer(layer_id, kind, name, children)
    except ValueError as exc:
        raise StepFormatError(str(exc)) from exc


def _require_str(step: Mapping[str, object], key: str) -> str:
    value = step.get(key)
    if not isinstance(value, str) or not value:
        raise StepFormatError(f"step {step.get('op')!r} needs a non-empty string {key!r}")
    return value


def _optional_bool(step: Mapping[str, object], key: str, default: bool) -> bool:
    value = step.get(key, default)
    if not isinstance(value, bool):
        raise StepFormatError(f"step {step.get('op')!r} field {key!r} must be a boolean")
    return value


def action_from_step(step: object) -> LayerAction:
    """Decode one replay-script step such as ``{"op": "toggle_visibility", "layer_id": "a"}``."""
    if not isinstance(step, Mapping):
        raise StepFormatError(f"step must be an object, got {type(step).__name__}")
    op = step.get("op")
    if op == "add":
        raw_layers = step.get("layers", [])
        if not isinstance(raw_layers, list):
            raise StepFormatError("step 'add' needs a list of layers")
        return AddLayers(tuple(layer_from_dict(raw) for raw in raw_layers))
    if op == "clear_selection":
        return ClearLayerSelections()
    if op == "toggle_expansion":
        return ToggleLayerExpansion(_require_str(step, "layer_id"), _optional_bool(step, "recursive", False))
    if op == "toggle_visibility":
        return ToggleLayerVisibility(_require_str(step, "layer_id"))
    if op == "replace":
        return ReplaceLayer(layer_from_dict(step.get("layer")))
    if op == "delete_selected":
        return DeleteSelectedLayers()
    if op == "select":
        return SelectLayer(
            _require_str(step, "layer_id"),
            should_toggle=_optional_bool(step, "toggle", False),
            clear_existing=_optional_bool(step, "clear_existing", True),
        )
    if op == "set_active_root":
        return SetActiveRoot(_require_str(step, "root_id"))
    raise StepFormatError(f"unknown step op: {op!r}")


__all__ = [
    "StepFormatError",
    "layer_to_dict",
    "snapshot_to_dict",
    "layer_from_dict",
    "action_from_step",
]
