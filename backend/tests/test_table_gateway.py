"""Tests for the table gateway."""

from __future__ import annotations

import unittest
from datetime import datetime, timedelta, timezone

from sqlalchemy import select

from app.models.reference import Area
from app.services.gateway import GatewayError, RecordNotFoundError, TableGateway, record_to_dict
from db_case import DatabaseTestCase


class TableGatewayTests(DatabaseTestCase):
    def _seed_areas(self, count: int) -> list[Area]:
        base = datetime(2026, 1, 1, tzinfo=timezone.utc)
        rows = [Area(name=f"Area {index}", created_at=base + timedelta(minutes=index)) for index in range(count)]
        self.db.add_all(rows)
        self.db.commit()
        return rows

    def test_list_page_orders_newest_first_and_counts_all(self) -> None:
        self._seed_areas(12)
        gateway = TableGateway(self.db, Area)

        first, total = gateway.list_page(1, 5)
        last, _ = gateway.list_page(3, 5)

        self.assertEqual(total, 12)
        self.assertEqual([row.name for row in first], ["Area 11", "Area 10", "Area 9", "Area 8", "Area 7"])
        self.assertEqual([row.name for row in last], ["Area 1", "Area 0"])

    def test_list_page_past_the_end_is_empty(self) -> None:
        self._seed_areas(3)

        rows, total = TableGateway(self.db, Area).list_page(2, 10)

        self.assertEqual(rows, [])
        self.assertEqual(total, 3)

    def test_create_update_delete(self) -> None:
        gateway = TableGateway(self.db, Area)

        created = gateway.create({"name": "North", "id": "ignored"})
        self.assertNotEqual(created.id, "ignored")

        updated = gateway.update(created.id, {"name": "North East"})
        self.assertEqual(updated.name, "North East")

        gateway.delete(created.id)
        self.assertIsNone(gateway.get(created.id))

    def test_missing_rows_raise_not_found(self) -> None:
        gateway = TableGateway(self.db, Area)

        with self.assertRaises(RecordNotFoundError):
            gateway.update("missing", {"name": "x"})
        with self.assertRaises(RecordNotFoundError):
            gateway.delete("missing")

    def test_unknown_column_is_rejected(self) -> None:
        with self.assertRaises(GatewayError) as ctx:
            TableGateway(self.db, Area).create({"name": "x", "colour": "red"})

        self.assertIn("colour", ctx.exception.message)

    def test_store_failure_surfaces_as_gateway_error(self) -> None:
        with self.assertRaises(GatewayError):
            TableGateway(self.db, Area).create({"name": None})

        self.assertEqual(TableGateway(self.db, Area).count(), 0)

    def test_insert_many_is_all_or_nothing(self) -> None:
        gateway = TableGateway(self.db, Area)

        with self.assertRaises(GatewayError):
            gateway.insert_many([{"name": "Valid"}, {"name": None}])
        self.assertEqual(list(self.db.scalars(select(Area)).all()), [])

        inserted = gateway.insert_many([{"name": "A"}, {"name": "B"}])
        self.assertEqual(len(inserted), 2)
        self.assertEqual(gateway.count(), 2)

    def test_record_to_dict_flattens_columns(self) -> None:
        record = TableGateway(self.db, Area).create({"name": "Harbour"})

        flat = record_to_dict(record)

        self.assertEqual(set(flat), {"id", "name", "created_at", "updated_at"})
        self.assertEqual(flat["name"], "Harbour")


if __name__ == "__main__":
    unittest.main()
