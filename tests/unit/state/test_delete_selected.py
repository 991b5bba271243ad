"""Deletion tests: cascading cleanup, last-root fallback, and active-root repair."""

from __future__ import annotations

import unittest

from layertree.layers import find_layer_by_id, new_group, new_leaf, new_root, walk_layers
from layertree.state import (
    AddLayers,
    DeleteSelectedLayers,
    LayerState,
    SelectLayer,
    SetActiveRoot,
    ToggleLayerExpansion,
    ToggleLayerVisibility,
    build_initial_state,
    check_state_invariants,
    transition,
)


def _select(state: LayerState, *layer_ids: str) -> LayerState:
    for layer_id in layer_ids:
        state = transition(state, SelectLayer(layer_id, clear_existing=False))
    return state


def _forest_ids(state: LayerState) -> set[str]:
    return {layer.id for root in state.roots for layer in walk_layers(root)}


class DeleteSelectedLayersTests(unittest.TestCase):
    def test_no_selection_returns_same_state_object(self) -> None:
        state = build_initial_state()
        self.assertIs(transition(state, DeleteSelectedLayers()), state)

    def test_add_delete_and_toggle_scenario(self) -> None:
        state = build_initial_state(root_id="r0")
        state = transition(state, AddLayers((new_leaf("A", layer_id="a"), new_leaf("B", layer_id="b"))))
        self.assertEqual([child.id for child in state.roots[0].children], ["a", "b"])
        self.assertEqual(len(state.roots), 1)

        state = transition(_select(state, "a"), DeleteSelectedLayers())
        self.assertEqual([child.id for child in state.roots[0].children], ["b"])
        self.assertEqual(state.selected_ids, frozenset())

        state = transition(state, ToggleLayerExpansion("r0"))
        self.assertEqual(state.collapsed_ids, {"r0"})
        state = transition(state, ToggleLayerExpansion("r0"))
        self.assertEqual(state.collapsed_ids, frozenset())
        check_state_invariants(state)

    def test_deleting_active_root_activates_first_remaining_root(self) -> None:
        state = build_initial_state(root_id="r0")
        state = transition(state, AddLayers((new_root("R1", layer_id="r1"),)))
        state = transition(state, SetActiveRoot("r1"))

        state = transition(_select(state, "r1"), DeleteSelectedLayers())

        self.assertEqual([root.id for root in state.roots], ["r0"])
        self.assertEqual(state.active_root_id, "r0")
        check_state_invariants(state)

    def test_deleting_inactive_root_keeps_active_root(self) -> None:
        state = build_initial_state(root_id="r0")
        state = transition(state, AddLayers((new_root("R1", layer_id="r1"),)))

        state = transition(_select(state, "r1"), DeleteSelectedLayers())

        self.assertEqual([root.id for root in state.roots], ["r0"])
        self.assertEqual(state.active_root_id, "r0")

    def test_deleting_last_root_synthesizes_fresh_empty_root(self) -> None:
        state = build_initial_state(root_id="r0")
        state = transition(state, AddLayers((new_leaf("A", layer_id="a"), new_group("G", [new_leaf("B", layer_id="b")], layer_id="g"))))

        state = transition(_select(state, "r0", "a", "g", "b"), DeleteSelectedLayers())

        self.assertEqual(len(state.roots), 1)
        fresh = state.roots[0]
        self.assertNotEqual(fresh.id, "r0")
        self.assertTrue(fresh.is_root)
        self.assertEqual(fresh.children, ())
        self.assertEqual(state.active_root_id, fresh.id)
        self.assertEqual(state.selected_ids, frozenset())
        check_state_invariants(state)

    def test_selected_descendant_of_deleted_ancestor_is_skipped(self) -> None:
        state = build_initial_state(root_id="r0")
        group = new_group("G", [new_leaf("X", layer_id="x"), new_leaf("Y", layer_id="y")], layer_id="g")
        state = transition(state, AddLayers((group, new_leaf("C", layer_id="c"))))

        state = transition(_select(state, "g", "x"), DeleteSelectedLayers())

        self.assertEqual(_forest_ids(state), {"r0", "c"})
        self.assertEqual(state.selected_ids, frozenset())

    def test_unknown_selected_ids_are_ignored(self) -> None:
        state = build_initial_state(root_id="r0")
        state = transition(state, AddLayers((new_leaf("A", layer_id="a"),)))

        deleted = transition(_select(state, "ghost"), DeleteSelectedLayers())

        self.assertEqual(deleted.roots, state.roots)
        self.assertEqual(deleted.selected_ids, frozenset())

    def test_deletion_purges_flags_of_whole_subtree_by_default(self) -> None:
        state = build_initial_state(root_id="r0")
        group = new_group("G", [new_leaf("A", layer_id="a")], layer_id="g")
        state = transition(state, AddLayers((group, new_leaf("C", layer_id="c"))))
        state = transition(state, ToggleLayerExpansion("g", recursive=True))
        state = transition(state, ToggleLayerVisibility("a"))
        state = transition(state, ToggleLayerVisibility("c"))

        state = transition(_select(state, "g"), DeleteSelectedLayers())

        self.assertIsNone(find_layer_by_id(state.roots, "a"))
        self.assertEqual(state.collapsed_ids, frozenset())
        self.assertEqual(state.hidden_ids, {"c"})

    def test_deletion_can_purge_only_deleted_ids(self) -> None:
        state = build_initial_state(root_id="r0")
        group = new_group("G", [new_leaf("A", layer_id="a")], layer_id="g")
        state = transition(state, AddLayers((group,)))
        state = transition(state, ToggleLayerExpansion("g", recursive=True))
        state = transition(state, ToggleLayerVisibility("a"))

        state = transition(_select(state, "g"), DeleteSelectedLayers(), purge_subtrees=False)

        self.assertEqual(state.collapsed_ids, {"a"})
        self.assertEqual(state.hidden_ids, {"a"})

    def test_selected_descendants_are_skipped_regardless_of_id_order(self) -> None:
        for parent_id, child_id in (("z", "a"), ("a", "z")):
            with self.subTest(parent_id=parent_id):
                state = build_initial_state(root_id="r0")
                group = new_group("G", [new_leaf("L", layer_id=child_id)], layer_id=parent_id)
                state = transition(state, AddLayers((group,)))
                state = transition(state, ToggleLayerExpansion(parent_id, recursive=True))

                state = transition(_select(state, parent_id, child_id), DeleteSelectedLayers(), purge_subtrees=False)

                self.assertEqual(_forest_ids(state), {"r0"})
                self.assertEqual(state.collapsed_ids, {child_id})

    def test_unchanged_flag_sets_are_reused(self) -> None:
        state = build_initial_state(root_id="r0")
        state = transition(state, AddLayers((new_leaf("A", layer_id="a"), new_leaf("B", layer_id="b"))))
        state = transition(state, ToggleLayerVisibility("b"))

        deleted = transition(_select(state, "a"), DeleteSelectedLayers())

        self.assertIs(deleted.hidden_ids, state.hidden_ids)
        self.assertIs(deleted.collapsed_ids, state.collapsed_ids)

    def test_deleted_ids_leave_the_forest(self) -> None:
        state = build_initial_state(root_id="r0")
        state = transition(state, AddLayers((new_root("R1", [new_leaf("X", layer_id="x")], layer_id="r1"),)))
        state = transition(state, AddLayers((new_leaf("A", layer_id="a"), new_leaf("B", layer_id="b"))))

        state = transition(_select(state, "a", "x"), DeleteSelectedLayers())

        self.assertEqual(_forest_ids(state), {"r0", "b", "r1"})
        self.assertEqual(state.selected_ids, frozenset())
        check_state_invariants(state)


if __name__ == "__main__":
    unittest.main()
