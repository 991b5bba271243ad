"""Transition function for layer-tree snapshots.

``transition`` maps ``(state, action)`` to a new ``LayerState`` without
mutating its inputs. Only ``ReplaceLayer`` and ``SetActiveRoot`` can fail, and
only with ``LayerNotFoundError`` for ids the caller should never have sent.
"""

from __future__ import annotations

import logging

from ..errors import LayerNotFoundError
from ..layers import (
    collect_subtree_ids,
    find_containing_root,
    find_layer_by_id,
    new_root,
    remove_layer_from_tree,
    replace_layer_in_tree,
)
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
from .snapshot import LayerState, root_index

logger = logging.getLogger(__name__)


def add_layers(state: LayerState, action: AddLayers) -> LayerState:
    # TODO: insert below the current selection once selection carries a position.
    if not action.layers:
        return state
    added_roots = [layer for layer in action.layers if layer.is_root]
    added_children = tuple(layer for layer in action.layers if not layer.is_root)
    roots = list(state.roots)
    if added_children:
        active_idx = root_index(state, state.active_root_id)
        if active_idx < 0:
            raise LayerNotFoundError(state.active_root_id, f"active root not found: {state.active_root_id!r}")
        active = roots[active_idx]
        roots[active_idx] = active.with_children(active.children + added_children)
    roots.extend(added_roots)
    return LayerState(
        roots=tuple(roots),
        active_root_id=state.active_root_id,
        selected_ids=state.selected_ids,
        collapsed_ids=state.collapsed_ids,
        hidden_ids=state.hidden_ids,
    )


def clear_layer_selections(state: LayerState) -> LayerState:
    return _with_sets(state, selected_ids=frozenset())


def toggle_layer_expansion(state: LayerState, action: ToggleLayerExpansion) -> LayerState:
    """Collapse or expand ``action.layer_id`` (and its subtree when recursive).

    The direction depends only on whether ``layer_id`` itself is collapsed.
    """
    layer_ids = {action.layer_id}
    if action.recursive:
        layer = find_layer_by_id(state.roots, action.layer_id)
        if layer is not None:
            layer_ids |= collect_subtree_ids(layer)
    if action.layer_id in state.collapsed_ids:
        collapsed_ids = state.collapsed_ids - layer_ids
    else:
        collapsed_ids = state.collapsed_ids | layer_ids
    return _with_sets(state, collapsed_ids=collapsed_ids)


def toggle_layer_visibility(state: LayerState, action: ToggleLayerVisibility) -> LayerState:
    return _with_sets(state, hidden_ids=state.hidden_ids ^ {action.layer_id})


def replace_layer(state: LayerState, action: ReplaceLayer) -> LayerState:
    replacement = action.layer
    if replacement.is_root:
        replacement_root = replacement
    else:
        if root_index(state, replacement.id) >= 0:
            raise LayerNotFoundError(replacement.id, f"root {replacement.id!r} can only be replaced by a root layer")
        parent_root = find_containing_root(state.roots, replacement.id)
        if parent_root is None:
            raise LayerNotFoundError(replacement.id)
        replacement_root = replace_layer_in_tree(parent_root, replacement)

    idx = root_index(state, replacement_root.id)
    if idx < 0:
        raise LayerNotFoundError(replacement_root.id, f"root not found: {replacement_root.id!r}")
    roots = state.roots[:idx] + (replacement_root,) + state.roots[idx + 1 :]
    return LayerState(
        roots=roots,
        active_root_id=state.active_root_id,
        selected_ids=state.selected_ids,
        collapsed_ids=state.collapsed_ids,
        hidden_ids=state.hidden_ids,
    )


def delete_selected_layers(state: LayerState, *, purge_subtrees: bool = True) -> LayerState:
    """Remove every selected layer, dropping roots that are selected themselves.

    A selected layer inside another selected layer's subtree is removed with
    that ancestor and not processed on its own. With ``purge_subtrees`` the
    collapsed/hidden flags of every removed descendant are dropped too;
    otherwise only the directly deleted ids are.
    """
    if not state.selected_ids:
        return state

    subtrees: dict[str, set[str]] = {}
    for layer_id in state.selected_ids:
        layer = find_layer_by_id(state.roots, layer_id)
        if layer is not None:
            subtrees[layer_id] = collect_subtree_ids(layer)
    nested: set[str] = set()
    for layer_id, subtree_ids in subtrees.items():
        nested |= (subtree_ids - {layer_id}) & subtrees.keys()

    roots = list(state.roots)
    purged: set[str] = set()
    for layer_id in sorted(subtrees.keys() - nested):
        parent_root = find_containing_root(roots, layer_id)
        if parent_root is None:
            continue
        if purge_subtrees:
            purged |= subtrees[layer_id]
        else:
            purged.add(layer_id)
        idx = next(i for i, root in enumerate(roots) if root.id == parent_root.id)
        rebuilt = remove_layer_from_tree(parent_root, layer_id)
        if rebuilt is None:
            del roots[idx]
        else:
            roots[idx] = rebuilt

    collapsed_ids = state.collapsed_ids - purged
    if len(collapsed_ids) == len(state.collapsed_ids):
        collapsed_ids = state.collapsed_ids
    hidden_ids = state.hidden_ids - purged
    if len(hidden_ids) == len(state.hidden_ids):
        hidden_ids = state.hidden_ids

    if not roots:
        logger.warning("last root deleted; creating an empty replacement root")
        roots.append(new_root())
    active_root_id = state.active_root_id
    if not any(root.id == active_root_id for root in roots):
        active_root_id = roots[0].id

    return LayerState(
        roots=tuple(roots),
        active_root_id=active_root_id,
        selected_ids=frozenset(),
        collapsed_ids=collapsed_ids,
        hidden_ids=hidden_ids,
    )


def select_layer(state: LayerState, action: SelectLayer) -> LayerState:
    layer_id = action.layer_id
    if action.clear_existing:
        selected = {layer_id} & state.selected_ids
    else:
        selected = set(state.selected_ids)
    if action.should_toggle and layer_id in selected:
        selected.discard(layer_id)
    else:
        selected.add(layer_id)
    return _with_sets(state, selected_ids=frozenset(selected))


def set_active_root(state: LayerState, action: SetActiveRoot) -> LayerState:
    if root_index(state, action.root_id) < 0:
        raise LayerNotFoundError(action.root_id, f"root not found: {action.root_id!r}")
    if action.root_id == state.active_root_id:
        return state
    return LayerState(
        roots=state.roots,
        active_root_id=action.root_id,
        selected_ids=state.selected_ids,
        collapsed_ids=state.collapsed_ids,
        hidden_ids=state.hidden_ids,
    )


def _with_sets(
    state: LayerState,
    *,
    selected_ids: frozenset[str] | None = None,
    collapsed_ids: frozenset[str] | None = None,
    hidden_ids: frozenset[str] | None = None,
) -> LayerState:
    return LayerState(
        roots=state.roots,
        active_root_id=state.active_root_id,
        selected_ids=state.selected_ids if selected_ids is None else selected_ids,
        collapsed_ids=state.collapsed_ids if collapsed_ids is None else collapsed_ids,
        hidden_ids=state.hidden_ids if hidden_ids is None else hidden_ids,
    )


def transition(state: LayerState, action: LayerAction, *, purge_subtrees: bool = True) -> LayerState:
    """Return the snapshot that results from applying ``action`` to ``state``.

    Unknown actions return ``state`` unchanged.
    """
    logger.debug("applying %s to %d root(s)", type(action).__name__, len(state.roots))
    if isinstance(action, AddLayers):
        return add_layers(state, action)
    if isinstance(action, ClearLayerSelections):
        return clear_layer_selections(state)
    if isinstance(action, ToggleLayerExpansion):
        return toggle_layer_expansion(state, action)
    if isinstance(action, ToggleLayerVisibility):
        return toggle_layer_visibility(state, action)
    if isinstance(action, ReplaceLayer):
        return replace_layer(state, action)
    if isinstance(action, DeleteSelectedLayers):
        return delete_selected_layers(state, purge_subtrees=purge_subtrees)
    if isinstance(action, SelectLayer):
        return select_layer(state, action)
    if isinstance(action, SetActiveRoot):
        return set_active_root(state, action)
    return state


__all__ = [
    "transition",
    "add_layers",
    "clear_layer_selections",
    "toggle_layer_expansion",
    "toggle_layer_visibility",
    "replace_layer",
    "delete_selected_layers",
    "select_layer",
    "set_active_root",
]
