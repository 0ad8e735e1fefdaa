"""Edit-session behavior tests.

Validates strict undo/redo stacking, the pending-create rollback that
un-creates abandoned nodes, and the edit-mode gates on history and deletion.
"""

from __future__ import annotations

import unittest

from tree_blueprint.editing import MAX_UNDO_HISTORY, EditSession
from tree_blueprint.tree_model import FileNode, FolderNode, NodeIdFactory, find_node


def _sample_tree() -> FolderNode:
    return FolderNode(
        "root",
        "myapp",
        (
            FolderNode("src", "src", (FileNode("a", "a.ts"), FileNode("b", "b.ts"))),
            FileNode("readme", "README.md"),
        ),
    )


def _session(history_limit: int = 100) -> EditSession:
    return EditSession(_sample_tree(), make_id=NodeIdFactory(prefix="n"), history_limit=history_limit)


class SessionBasicsTests(unittest.TestCase):
    def test_new_session_selects_root(self) -> None:
        session = _session()
        self.assertEqual(session.selected_id, "root")
        self.assertIsNone(session.editing_id)
        self.assertFalse(session.can_undo)

    def test_default_id_factory_avoids_existing_ids(self) -> None:
        tree = FolderNode("root", "r", ())
        session = EditSession(tree)
        session.create_child_file()
        self.assertNotEqual(session.editing_id, "root")

    def test_select_ignores_unknown_ids_and_open_edits(self) -> None:
        session = _session()
        self.assertFalse(session.select("gone"))
        self.assertTrue(session.select("src"))
        session.create_child_file()
        self.assertFalse(session.select("readme"))
        self.assertEqual(session.selected_id, session.editing_id)

    def test_begin_rename_skips_root(self) -> None:
        session = _session()
        self.assertFalse(session.begin_rename())
        session.select("a")
        self.assertTrue(session.begin_rename())
        self.assertEqual(session.editing_id, "a")


class SessionUndoRedoTests(unittest.TestCase):
    def test_undo_then_redo_restores_exact_pairs(self) -> None:
        session = _session()
        session.select("src")
        before_create = session.snapshot()
        session.create_child_folder()
        after_create = session.snapshot()
        session.commit_rename("lib")

        session.select("a")
        before_delete = session.snapshot()
        session.delete_selected()
        after_delete = session.snapshot()

        self.assertTrue(session.undo())
        self.assertEqual(session.snapshot(), before_delete)
        self.assertTrue(session.undo())
        self.assertEqual(session.snapshot(), after_create)
        self.assertTrue(session.undo())
        self.assertEqual(session.snapshot(), before_create)
        self.assertFalse(session.undo())

        self.assertTrue(session.redo())
        self.assertEqual(session.snapshot(), after_create)
        self.assertTrue(session.redo())
        self.assertEqual(session.snapshot(), before_delete)
        self.assertTrue(session.redo())
        self.assertEqual(session.snapshot(), after_delete)
        self.assertFalse(session.redo())

    def test_new_edit_clears_redo(self) -> None:
        session = _session()
        session.select("a")
        session.delete_selected()
        session.undo()
        self.assertTrue(session.can_redo)

        session.select("b")
        session.delete_selected()
        self.assertFalse(session.can_redo)

    def test_undo_and_redo_blocked_while_editing(self) -> None:
        session = _session()
        session.select("a")
        session.delete_selected()
        session.select("b")
        session.begin_rename()

        self.assertFalse(session.undo())
        self.assertFalse(session.redo())
        self.assertIsNone(find_node(session.tree, "a"))

    def test_delete_only_child_then_undo_restores_index(self) -> None:
        tree = FolderNode(
            "root",
            "r",
            (FileNode("x", "x"), FolderNode("p", "p", (FileNode("c", "c"),)), FileNode("y", "y")),
        )
        session = EditSession(tree, make_id=NodeIdFactory(prefix="n"))
        session.select("c")
        self.assertTrue(session.delete_selected())
        self.assertEqual(session.selected_id, "p")

        self.assertTrue(session.undo())
        self.assertEqual(session.tree, tree)
        self.assertEqual(session.selected_id, "c")

    def test_root_delete_is_noop_without_history(self) -> None:
        session = _session()
        self.assertFalse(session.delete("root"))
        self.assertFalse(session.can_undo)

    def test_delete_blocked_while_editing(self) -> None:
        session = _session()
        session.select("a")
        session.begin_rename()
        self.assertFalse(session.delete("a"))
        self.assertFalse(session.delete("b"))
        self.assertIsNotNone(find_node(session.tree, "a"))

    def test_history_bound_evicts_oldest(self) -> None:
        session = _session(history_limit=2)
        for _ in range(4):
            session.create_child_file()
            session.commit_rename("")
            session.create_child_file()
            session.commit_rename("kept")
            session.select("root")
        self.assertEqual(len(session.history.undo_stack), 2)

    def test_default_history_keeps_last_hundred_edits(self) -> None:
        session = EditSession(_sample_tree(), make_id=NodeIdFactory(prefix="n"))
        self.assertEqual(MAX_UNDO_HISTORY, 100)
        self.assertEqual(session.history.max_entries, 100)

        session.select("a")
        for idx in range(101):
            session.begin_rename()
            session.commit_rename(f"name-{idx}")
        names = [find_node(snap.tree, "a").name for snap in session.history.undo_stack]
        # the entry recorded before the first rename ("a.ts") was evicted
        self.assertEqual(len(names), 100)
        self.assertEqual(names[0], "name-0")
        self.assertEqual(names[-1], "name-99")


class PendingCreateTests(unittest.TestCase):
    def test_escape_on_new_sibling_restores_tree_and_stacks(self) -> None:
        session = _session()
        session.select("a")
        session.delete_selected()
        session.undo()
        session.select("src")

        tree_before = session.tree
        undo_before = list(session.history.undo_stack)
        redo_before = list(session.history.redo_stack)

        self.assertTrue(session.create_sibling_folder())
        self.assertEqual(session.editing_id, session.selected_id)
        self.assertNotEqual(session.tree, tree_before)

        self.assertTrue(session.cancel_edit())
        self.assertEqual(session.tree, tree_before)
        self.assertEqual(session.selected_id, "src")
        self.assertEqual(session.history.undo_stack, undo_before)
        self.assertEqual(session.history.redo_stack, redo_before)
        self.assertIsNone(session.editing_id)
        self.assertIsNone(session.pending_create)

    def test_empty_commit_rolls_back_child_creation_with_coercion(self) -> None:
        session = _session()
        session.select("readme")
        before = session.snapshot()

        session.create_child_file()
        self.assertIsInstance(find_node(session.tree, "readme"), FolderNode)

        session.commit_rename("   ")
        self.assertEqual(session.snapshot(), before)
        self.assertIsInstance(find_node(session.tree, "readme"), FileNode)
        self.assertFalse(session.can_undo)

    def test_rollback_is_exact_when_history_is_full(self) -> None:
        session = _session(history_limit=2)
        for name in ("one", "two"):
            session.select("a")
            session.begin_rename()
            session.commit_rename(name)
        undo_before = list(session.history.undo_stack)

        session.create_child_folder()
        session.cancel_edit()
        self.assertEqual(session.history.undo_stack, undo_before)

    def test_named_create_becomes_permanent(self) -> None:
        session = _session()
        session.create_child_folder()
        new_id = session.editing_id

        self.assertTrue(session.commit_rename("docs"))
        self.assertIsNone(session.pending_create)
        node = find_node(session.tree, new_id)
        assert node is not None
        self.assertEqual(node.name, "docs")

        # undo the rename, then the create
        session.undo()
        self.assertEqual(find_node(session.tree, new_id).name, "New Folder")
        session.undo()
        self.assertIsNone(find_node(session.tree, new_id))

    def test_committing_placeholder_name_keeps_node_and_clears_token(self) -> None:
        session = _session()
        session.create_child_file()
        new_id = session.editing_id

        self.assertFalse(session.commit_rename("New File"))
        self.assertIsNone(session.editing_id)
        self.assertIsNone(session.pending_create)
        self.assertIsNotNone(find_node(session.tree, new_id))
        self.assertEqual(len(session.history.undo_stack), 1)

    def test_escape_on_existing_node_keeps_name(self) -> None:
        session = _session()
        session.select("a")
        session.begin_rename()

        self.assertFalse(session.cancel_edit())
        self.assertEqual(find_node(session.tree, "a").name, "a.ts")
        self.assertIsNone(session.editing_id)
        self.assertFalse(session.can_undo)

    def test_creation_blocked_while_editing(self) -> None:
        session = _session()
        session.create_child_folder()
        tree = session.tree
        self.assertFalse(session.create_child_file())
        self.assertFalse(session.create_sibling_file())
        self.assertIs(session.tree, tree)

    def test_commit_for_another_node_ends_pending_create(self) -> None:
        session = _session()
        session.create_child_folder()
        new_id = session.editing_id
        assert new_id is not None

        self.assertTrue(session.commit_rename("renamed-a", "a"))
        self.assertIsNone(session.pending_create)
        self.assertIsNone(session.editing_id)

        session.select(new_id)
        session.begin_rename()
        self.assertFalse(session.cancel_edit())
        self.assertEqual(find_node(session.tree, "a").name, "renamed-a")
        self.assertEqual(find_node(session.tree, new_id).name, "New Folder")
        self.assertEqual(len(session.history.undo_stack), 2)

    def test_pending_create_reports_pre_create_undo_depth(self) -> None:
        session = _session()
        session.select("a")
        session.delete_selected()
        session.create_child_file()
        pending = session.pending_create
        assert pending is not None
        self.assertEqual(pending.undo_depth, 1)
        self.assertEqual(len(session.history.undo_stack), 2)

        session.cancel_edit()
        self.assertEqual(len(session.history.undo_stack), pending.undo_depth)

    def test_ids_are_not_reused_after_rollback(self) -> None:
        session = _session()
        session.create_child_file()
        first = session.editing_id
        session.cancel_edit()
        session.create_child_file()
        self.assertNotEqual(session.editing_id, first)


class SessionLoadAndExportTests(unittest.TestCase):
    def test_load_tree_resets_state(self) -> None:
        session = _session()
        session.select("a")
        session.delete_selected()

        replacement = FolderNode("other", "other", (FileNode("n-0", "clash"),))
        session.load_tree(replacement)
        self.assertEqual(session.selected_id, "other")
        self.assertFalse(session.can_undo)

        session.create_child_file()
        self.assertNotEqual(session.editing_id, "n-0")

    def test_export_text_uses_canonical_order(self) -> None:
        session = _session()
        session.create_child_folder()
        session.commit_rename("assets")
        self.assertEqual(
            session.export_text(),
            ".myapp\n"
            "├── assets\n"
            "├── src\n"
            "│   ├── a.ts\n"
            "│   └── b.ts\n"
            "└── README.md\n",
        )
        self.assertEqual(session.tree.children[-1].name, "assets")

    def test_export_handles_deeply_nested_folders(self) -> None:
        session = EditSession(FolderNode("root", "deep", ()), make_id=NodeIdFactory(prefix="n"))
        depth = 1200
        for _ in range(depth):
            self.assertTrue(session.create_child_folder())
            self.assertTrue(session.commit_rename("d"))

        lines = session.export_text().splitlines()
        self.assertEqual(len(lines), depth + 1)
        self.assertEqual(lines[0], ".deep")
        self.assertEqual(lines[1], "└── d")
        self.assertEqual(lines[-1], "    " * (depth - 1) + "└── d")

        bullets = session.export_text("bullets").splitlines()
        self.assertEqual(len(bullets), depth + 1)
        self.assertEqual(bullets[-1], "  " * depth + "- d/")


if __name__ == "__main__":
    unittest.main()
