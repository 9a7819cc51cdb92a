import unittest

from context_menu import ContextMenuAction
from selection import CellRef, SelectionMode
from test_grid_editor import EST, JOB, PRIORITY, STATUS, make_editor


class ColumnMutationTests(unittest.TestCase):
    def test_add_then_delete_custom_column(self):
        editor, messages = make_editor()
        key = editor.add_column("Region")
        self.assertEqual(key, "region")
        self.assertEqual(editor.registry.keys()[-1], "region")
        self.assertEqual(editor.registry.width_of("region"), 160)
        self.assertEqual([editor.store.get_field(r, "region") for r in (1, 2, 3)], ["", "", ""])
        self.assertIn("Inserted column 'Region'", messages)

        self.assertTrue(editor.delete_column("region"))
        self.assertNotIn("region", editor.registry.keys())
        self.assertNotIn("region", editor.registry.widths)
        self.assertNotIn("region", editor.store.df.columns)

    def test_duplicate_label_is_rejected(self):
        editor, messages = make_editor()
        editor.add_column("Notes")
        self.assertIsNone(editor.add_column("notes"))
        self.assertEqual(editor.registry.keys().count("notes"), 1)
        self.assertIn("Column 'notes' already exists", messages)

    def test_built_in_column_cannot_be_deleted(self):
        editor, messages = make_editor()
        before = editor.registry.keys()
        self.assertFalse(editor.delete_column("status"))
        self.assertEqual(editor.registry.keys(), before)
        self.assertIn("status", editor.store.df.columns)
        self.assertIn("Cannot delete built-in column 'status'", messages)

    def test_blank_label_is_rejected(self):
        editor, messages = make_editor()
        self.assertIsNone(editor.add_column("   "))
        self.assertIn("Name required", messages)

    def test_clear_and_rename_column(self):
        editor, _ = make_editor()
        editor.add_column("Region")
        editor.store.set_field(1, "region", "EMEA")
        self.assertTrue(editor.clear_column("region"))
        self.assertEqual(editor.store.get_field(1, "region"), "")

        self.assertTrue(editor.rename_column("region", "Sales Region"))
        self.assertEqual(editor.registry.get("region").label, "Sales Region")
        self.assertFalse(editor.rename_column("status", "State"))

    def test_resize_clamps_to_minimum(self):
        editor, _ = make_editor()
        self.assertEqual(editor.resize_column("url", 20), 80)
        self.assertEqual(editor.resize_column("url", 240), 240)

    def test_deleting_edited_column_cancels_edit(self):
        editor, _ = make_editor()
        editor.add_column("Region")
        editor.double_click(1, EST + 1)
        editor.update_draft("APAC")
        editor.delete_column("region")
        self.assertEqual(editor.mode, SelectionMode.IDLE)

    def test_adding_column_commits_pending_edit(self):
        editor, _ = make_editor()
        editor.double_click(2, JOB)
        editor.update_draft("Logo refresh")
        editor.add_column("Region")
        self.assertEqual(editor.store.get_field(2, "jobRequest"), "Logo refresh")
        self.assertEqual(editor.mode, SelectionMode.SINGLE)


class RowMutationTests(unittest.TestCase):
    def test_row_lifecycle(self):
        editor, _ = make_editor()
        self.assertEqual(editor.add_row(), 4)
        self.assertEqual(editor.duplicate_row(2), 5)
        self.assertEqual(editor.store.ids(), [1, 2, 5, 3, 4])
        self.assertTrue(editor.delete_row(5))
        self.assertFalse(editor.delete_row(5))
        self.assertEqual(editor.add_row(0), 5)
        self.assertEqual(editor.store.ids(), [5, 1, 2, 3, 4])

    def test_deleting_edited_row_cancels_edit(self):
        editor, _ = make_editor()
        editor.double_click(2, JOB)
        editor.update_draft("gone")
        editor.delete_row(2)
        self.assertEqual(editor.mode, SelectionMode.IDLE)
        self.assertNotIn(2, editor.store)

    def test_clear_row_resets_every_field(self):
        editor, _ = make_editor()
        editor.store.set_field(1, "submitter", "Mark Johnson")
        self.assertTrue(editor.clear_row(1))
        row = editor.store.get_row(1)
        self.assertEqual(row["id"], 1)
        self.assertTrue(all(v == "" for k, v in row.items() if k != "id"))
        self.assertFalse(editor.clear_row(42))

    def test_clearing_edited_row_discards_draft_and_keeps_cell(self):
        editor, _ = make_editor()
        editor.store.set_field(1, "jobRequest", "Logo refresh")
        editor.double_click(1, JOB)
        editor.update_draft("draft")
        self.assertTrue(editor.clear_row(1))
        self.assertEqual(editor.store.get_field(1, "jobRequest"), "")
        self.assertEqual(editor.mode, SelectionMode.SINGLE)
        self.assertEqual(editor.selection.cell, CellRef(1, JOB))

    def test_clearing_other_row_commits_edit(self):
        editor, _ = make_editor()
        editor.double_click(1, JOB)
        editor.update_draft("kept")
        editor.clear_row(2)
        self.assertEqual(editor.store.get_field(1, "jobRequest"), "kept")
        self.assertEqual(editor.mode, SelectionMode.SINGLE)


class BatchTests(unittest.TestCase):
    def _select(self, editor, cells):
        for row_id, col in cells:
            editor.click(row_id, col, modifier=True)

    def test_batch_delete_removes_distinct_rows(self):
        editor, messages = make_editor(4)
        self._select(editor, [(1, JOB), (1, STATUS), (3, JOB)])
        self.assertEqual(editor.batch_delete(), 2)
        self.assertEqual(editor.store.ids(), [2, 4])
        self.assertEqual(editor.mode, SelectionMode.IDLE)
        self.assertIn("Deleted 2 rows", messages)

    def test_batch_duplicate_follows_store_order(self):
        editor, _ = make_editor(3)
        self._select(editor, [(3, JOB), (1, JOB)])
        self.assertEqual(editor.batch_duplicate(), [4, 5])
        self.assertEqual(editor.store.ids(), [1, 4, 2, 3, 5])
        self.assertEqual(editor.mode, SelectionMode.IDLE)

    def test_batch_clear_keeps_rows(self):
        editor, _ = make_editor(3)
        editor.store.set_field(2, "submitter", "Irfan Khan")
        self._select(editor, [(2, JOB)])
        self.assertEqual(editor.batch_clear(), 1)
        self.assertEqual(editor.store.get_field(2, "submitter"), "")
        self.assertEqual(editor.store.get_field(2, "status"), "")
        self.assertEqual(len(editor.store), 3)
        self.assertEqual(editor.mode, SelectionMode.IDLE)

    def test_batch_with_empty_selection_is_noop(self):
        editor, _ = make_editor(2)
        self.assertEqual(editor.batch_delete(), 0)
        self.assertEqual(editor.batch_duplicate(), [])
        self.assertEqual(len(editor.store), 2)

    def test_delete_key_in_multi_clears_selected_cells(self):
        editor, _ = make_editor(2)
        self._select(editor, [(1, PRIORITY), (2, STATUS)])
        editor.handle_key("Delete")
        self.assertEqual(editor.store.get_field(1, "priority"), "")
        self.assertEqual(editor.store.get_field(2, "status"), "")
        self.assertEqual(editor.store.get_field(1, "status"), "need-to-start")
        self.assertEqual(editor.mode, SelectionMode.MULTI)

    def test_shift_delete_in_multi_deletes_rows(self):
        editor, _ = make_editor(3)
        self._select(editor, [(1, PRIORITY), (2, STATUS)])
        editor.handle_key("Backspace", shift=True)
        self.assertEqual(editor.store.ids(), [3])


class ContextMenuTests(unittest.TestCase):
    def test_add_row_above_first_row(self):
        editor, _ = make_editor()
        self.assertEqual(editor.context_action(ContextMenuAction.ADD_ROW_ABOVE, 0, JOB), 4)
        self.assertEqual(editor.store.ids(), [4, 1, 2, 3])

    def test_add_row_below_uses_view_position(self):
        editor, _ = make_editor()
        editor.context_action("addRowBelow", 1, JOB)
        self.assertEqual(editor.store.ids(), [1, 2, 4, 3])

    def test_add_column_left_of_built_in_is_rejected(self):
        editor, messages = make_editor()
        self.assertIsNone(editor.context_action(ContextMenuAction.ADD_COLUMN_LEFT, 0, EST, "Notes"))
        self.assertNotIn("notes", editor.registry.keys())
        self.assertIn("Cannot insert before built-in column 'estValue'", messages)

    def test_add_column_right_of_last_built_in(self):
        editor, _ = make_editor()
        key = editor.context_action(ContextMenuAction.ADD_COLUMN_RIGHT, 0, EST, "Notes")
        self.assertEqual(key, "notes")
        self.assertEqual(editor.registry.index_of("notes"), 9)

        # left of a custom column is allowed
        key = editor.context_action(ContextMenuAction.ADD_COLUMN_LEFT, 0, EST + 1)
        self.assertEqual(key, "column1")
        self.assertEqual(editor.registry.keys()[9:], ["column1", "notes"])
        self.assertEqual(list(editor.store.df.columns[-2:]), ["column1", "notes"])

    def test_delete_built_in_column_is_rejected(self):
        editor, _ = make_editor()
        self.assertIsNone(editor.context_action(ContextMenuAction.DELETE_COLUMN, 0, STATUS))
        self.assertIn("status", editor.registry.keys())

    def test_clear_cell_and_duplicate_row(self):
        editor, _ = make_editor()
        editor.context_action(ContextMenuAction.CLEAR_CELL, 1, PRIORITY)
        self.assertEqual(editor.store.get_field(2, "priority"), "")
        self.assertEqual(editor.context_action(ContextMenuAction.DUPLICATE_ROW, 1, JOB), 4)
        self.assertEqual(editor.store.ids(), [1, 2, 4, 3])
        self.assertEqual(editor.store.get_field(4, "priority"), "")

    def test_out_of_range_row_index_reports(self):
        editor, messages = make_editor()
        self.assertIsNone(editor.context_action(ContextMenuAction.DELETE_ROW, 7, JOB))
        self.assertEqual(len(editor.store), 3)
        self.assertIn("Row #7 not found", messages)

    def test_menu_does_not_require_selection(self):
        editor, _ = make_editor()
        editor.click(3, JOB)
        editor.context_action(ContextMenuAction.CLEAR_ROW, 0, JOB)
        self.assertEqual(editor.store.get_field(1, "status"), "")
        self.assertEqual(editor.selection.cell, CellRef(3, JOB))


if __name__ == "__main__":
    unittest.main()
