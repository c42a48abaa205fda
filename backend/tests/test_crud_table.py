"""Tests for the schema-driven CRUD table controller."""

from __future__ import annotations

import unittest
from datetime import datetime, timedelta, timezone
from io import BytesIO

from openpyxl import Workbook

from app.models.reference import Area
from app.schema.registry import get_entity_schema
from app.services.crud_table import CrudTable, TableState
from app.services.gateway import GatewayError, RecordNotFoundError, TableGateway
from db_case import DatabaseTestCase


class _UnreachableGateway(TableGateway):
    def list_page(self, page: int, page_size: int):
        raise GatewayError("could not connect to server")


def _workbook_bytes(rows: list[list[object]]) -> bytes:
    workbook = Workbook()
    sheet = workbook.active
    for row in rows:
        sheet.append(row)
    buffer = BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


class CrudTableTests(DatabaseTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.schema = get_entity_schema("area")

    def _seed_areas(self, count: int) -> None:
        base = datetime(2026, 1, 1, tzinfo=timezone.utc)
        self.db.add_all(
            Area(name=f"Area {index:02d}", created_at=base + timedelta(minutes=index)) for index in range(count)
        )
        self.db.commit()

    def test_open_loads_first_page(self) -> None:
        self._seed_areas(12)

        table = CrudTable.open(self.db, self.schema)

        self.assertEqual(table.total_count, 12)
        self.assertEqual(len(table.records), 10)
        self.assertEqual(table.records[0]["name"], "Area 11")
        self.assertEqual(table.state, TableState.IDLE)
        self.assertTrue(table.pagination.visible)

    def test_failed_fetch_keeps_previous_rows(self) -> None:
        self._seed_areas(3)
        table = CrudTable.open(self.db, self.schema)
        before = list(table.records)

        table.gateway = _UnreachableGateway(self.db, Area)
        self.assertFalse(table.fetch())

        self.assertEqual(table.records, before)
        self.assertEqual(table.total_count, 3)
        self.assertEqual(table.notifications.last.level, "error")
        self.assertEqual(table.notifications.last.message, "could not connect to server")

    def test_created_record_is_listed_first(self) -> None:
        self._seed_areas(3)
        table = CrudTable.open(self.db, self.schema)

        draft = table.open_create()
        self.assertEqual(draft.values, {"name": ""})
        table.set_field("name", "Zeta")

        self.assertTrue(table.submit())
        self.assertEqual(table.records[0]["name"], "Zeta")
        self.assertIsNone(table.draft)
        self.assertEqual(table.notifications.last.message, "Area created successfully")

    def test_missing_required_value_blocks_submit(self) -> None:
        table = CrudTable.open(self.db, self.schema)
        table.open_create()
        table.set_field("name", "   ")

        self.assertFalse(table.submit())

        self.assertEqual(table.field_errors, {"name": "Name is required"})
        self.assertEqual(table.state, TableState.EDITING)
        self.assertEqual(TableGateway(self.db, Area).count(), 0)

    def test_unchanged_edit_submits(self) -> None:
        self._seed_areas(1)
        table = CrudTable.open(self.db, self.schema)
        record_id = table.records[0]["id"]

        draft = table.open_edit(record_id)

        self.assertTrue(draft.is_edit)
        self.assertTrue(table.submit())
        self.assertEqual(table.notifications.last.message, "Area updated successfully")
        self.assertEqual(table.records[0]["name"], "Area 00")

    def test_editing_a_row_deleted_meanwhile_raises_not_found(self) -> None:
        self._seed_areas(1)
        table = CrudTable.open(self.db, self.schema)
        record_id = table.records[0]["id"]
        table.open_edit(record_id)
        TableGateway(self.db, Area).delete(record_id)

        with self.assertRaises(RecordNotFoundError):
            table.submit()
        self.assertEqual(table.notifications.last.level, "error")
        self.assertEqual(table.state, TableState.EDITING)

    def test_read_only_columns_are_not_part_of_the_draft(self) -> None:
        self._seed_areas(1)
        table = CrudTable.open(self.db, self.schema)
        table.open_edit(table.records[0]["id"])

        with self.assertRaises(KeyError):
            table.set_field("created_at", "2020-01-01")

    def test_deleting_last_row_of_page_leaves_it_empty(self) -> None:
        self._seed_areas(11)
        table = CrudTable.open(self.db, self.schema, page=2)
        self.assertEqual(len(table.records), 1)

        self.assertTrue(table.delete(table.records[0]["id"]))

        self.assertEqual(table.current_page, 2)
        self.assertEqual(table.records, [])
        self.assertEqual(table.total_count, 10)
        self.assertFalse(table.pagination.visible)

    def test_page_navigation_stops_at_bounds(self) -> None:
        self._seed_areas(15)
        table = CrudTable.open(self.db, self.schema)

        self.assertFalse(table.previous_page())
        self.assertTrue(table.next_page())
        self.assertEqual(table.current_page, 2)
        self.assertFalse(table.next_page())
        self.assertEqual(table.current_page, 2)

    def test_import_inserts_all_rows_and_reports_count(self) -> None:
        table = CrudTable.open(self.db, self.schema)
        content = _workbook_bytes([["ID", "Name", "Notes"], ["x-1", "Harbour", "ignored"], ["x-2", "Ridge", None]])

        self.assertEqual(table.import_workbook(content), 2)

        self.assertEqual(table.total_count, 2)
        self.assertNotIn("x-1", {row["id"] for row in table.records})
        self.assertEqual(table.notifications.last.message, "Imported 2 records")

    def test_import_matches_headers_by_key_when_label_differs(self) -> None:
        table = CrudTable.open(self.db, self.schema)

        self.assertEqual(table.import_workbook(_workbook_bytes([["name"], ["Valley"]])), 1)
        self.assertEqual(table.records[0]["name"], "Valley")

    def test_import_rejects_batch_when_a_row_lacks_required_data(self) -> None:
        table = CrudTable.open(self.db, self.schema)
        content = _workbook_bytes([["Name", "Notes"], ["Harbour", None], [None, "no name here"]])

        self.assertIsNone(table.import_workbook(content))

        self.assertEqual(TableGateway(self.db, Area).count(), 0)
        self.assertEqual(table.notifications.last.level, "error")

    def test_import_rejects_batch_when_required_cell_is_whitespace(self) -> None:
        table = CrudTable.open(self.db, self.schema)
        content = _workbook_bytes([["Name"], ["Harbour"], ["   "]])

        self.assertIsNone(table.import_workbook(content))

        self.assertEqual(TableGateway(self.db, Area).count(), 0)
        self.assertEqual(table.notifications.last.level, "error")

    def test_import_strips_surrounding_whitespace(self) -> None:
        table = CrudTable.open(self.db, self.schema)

        self.assertEqual(table.import_workbook(_workbook_bytes([["Name"], ["  Ridge  "]])), 1)
        self.assertEqual(table.records[0]["name"], "Ridge")

    def test_import_of_unreadable_file_reports_error(self) -> None:
        table = CrudTable.open(self.db, self.schema)

        self.assertIsNone(table.import_workbook(b"not a workbook"))
        self.assertEqual(table.notifications.last.level, "error")

    def test_export_then_import_round_trips_editable_values(self) -> None:
        self._seed_areas(4)
        table = CrudTable.open(self.db, self.schema)
        exported = table.export_workbook()
        names = sorted(row["name"] for row in table.records)
        self._reset_tables()

        fresh = CrudTable.open(self.db, self.schema)
        self.assertEqual(fresh.import_workbook(exported.content), 4)
        self.assertEqual(sorted(row["name"] for row in fresh.records), names)

    def test_exports_are_named_after_the_title(self) -> None:
        self._seed_areas(2)
        table = CrudTable.open(self.db, self.schema)

        workbook = table.export_workbook()
        document = table.export_document()

        self.assertRegex(workbook.filename, r"^Area_\d+\.xlsx$")
        self.assertRegex(document.filename, r"^Area_\d+\.pdf$")
        self.assertTrue(document.content.startswith(b"%PDF"))
        self.assertEqual(table.notifications.last.message, "PDF generated successfully")


if __name__ == "__main__":
    unittest.main()
