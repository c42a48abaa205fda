"""Tests for the employee, menu configuration and dashboard services."""

from __future__ import annotations

import unittest

from pydantic import ValidationError

from app.models.menu_item import MenuItem
from app.schemas.employee import EmployeeForm
from app.schemas.menu_item import MenuItemForm
from app.services.dashboard import dashboard_cards
from app.services.employees import (
    create_employee,
    delete_employee,
    filter_employees,
    list_employees,
    update_employee,
)
from app.services.gateway import RecordNotFoundError
from app.services.menu_config import (
    create_menu_item,
    list_menu_items,
    menu_item_draft,
    new_menu_item_draft,
    update_menu_item,
)
from app.services.session import SessionContext
from db_case import DatabaseTestCase


def _context(role: str) -> SessionContext:
    return SessionContext(user_id="u-1", email="someone@example.com", full_name=None, role=role, token_id="t-1")


class EmployeeTests(DatabaseTestCase):
    def test_form_validation(self) -> None:
        with self.assertRaises(ValidationError):
            EmployeeForm(full_name="A", email="a@example.com")
        with self.assertRaises(ValidationError):
            EmployeeForm(full_name="Ana", email="not-an-email")
        with self.assertRaises(ValidationError):
            EmployeeForm(full_name="Ana", email="a@example.com", phone="0" * 21)

        form = EmployeeForm(full_name=" Ana ", email="a@example.com", position="", department="  ")
        self.assertEqual(form.full_name, "Ana")
        self.assertIsNone(form.position)
        self.assertIsNone(form.department)

    def test_crud_and_search(self) -> None:
        ana = create_employee(self.db, EmployeeForm(full_name="Ana Rivera", email="ana@example.com", department="Finance"))
        create_employee(self.db, EmployeeForm(full_name="Ben Okafor", email="ben@example.com", department="IT"))

        employees = list_employees(self.db)
        self.assertEqual(len(employees), 2)
        self.assertEqual([e.full_name for e in filter_employees(employees, "finance")], ["Ana Rivera"])
        self.assertEqual([e.full_name for e in filter_employees(employees, "BEN@")], ["Ben Okafor"])

        updated = update_employee(
            self.db, ana.id, EmployeeForm(full_name="Ana Rivera", email="ana@example.com", position="Lead")
        )
        self.assertEqual(updated.position, "Lead")
        self.assertIsNone(updated.department)

        delete_employee(self.db, ana.id)
        self.assertEqual([e.full_name for e in list_employees(self.db)], ["Ben Okafor"])
        with self.assertRaises(RecordNotFoundError):
            delete_employee(self.db, ana.id)


class MenuConfigTests(DatabaseTestCase):
    def test_new_draft_goes_after_existing_items(self) -> None:
        self.assertEqual(new_menu_item_draft(self.db).display_order, 0)
        create_menu_item(self.db, MenuItemForm(title="Dashboard", path="/dashboard"))
        create_menu_item(self.db, MenuItemForm(title="Area", path="/area", display_order=1))

        draft = new_menu_item_draft(self.db)

        self.assertEqual(draft.display_order, 2)
        self.assertTrue(draft.visible_to_admin)
        self.assertTrue(draft.visible_to_user)

    def test_checkboxes_become_roles_and_blanks_become_null(self) -> None:
        item = create_menu_item(
            self.db,
            MenuItemForm(title="Users", path="/users", description="", icon=" ", visible_to_user=False),
        )

        self.assertEqual(item.visible_to_roles, ["admin"])
        self.assertIsNone(item.description)
        self.assertIsNone(item.icon)

        draft = menu_item_draft(item)
        self.assertTrue(draft.visible_to_admin)
        self.assertFalse(draft.visible_to_user)

    def test_list_follows_display_order(self) -> None:
        create_menu_item(self.db, MenuItemForm(title="Third", path="/c", display_order=3))
        create_menu_item(self.db, MenuItemForm(title="First", path="/a", display_order=1))
        second = create_menu_item(self.db, MenuItemForm(title="Second", path="/b", display_order=5))
        update_menu_item(self.db, second.id, MenuItemForm(title="Second", path="/b", display_order=2))

        self.assertEqual([item.title for item in list_menu_items(self.db)], ["First", "Second", "Third"])

    def test_form_limits(self) -> None:
        with self.assertRaises(ValidationError):
            MenuItemForm(title="", path="/a")
        with self.assertRaises(ValidationError):
            MenuItemForm(title="A", path="/a", display_order=-1)
        with self.assertRaises(ValidationError):
            MenuItemForm(title="A" * 101, path="/a")


class DashboardTests(DatabaseTestCase):
    def test_admin_sees_every_card(self) -> None:
        self.create_account("admin@example.com", role="admin")
        self.db.add(MenuItem(title="Dashboard", path="/dashboard", display_order=0, visible_to_roles=["admin"]))
        self.db.commit()

        cards = {card.title: card.value for card in dashboard_cards(self.db, _context("admin"))}

        self.assertEqual(cards, {"Total Employees": 0, "Total Users": 1, "Menu Items": 1})

    def test_non_admin_sees_menu_card_only(self) -> None:
        cards = dashboard_cards(self.db, _context("user"))

        self.assertEqual([card.title for card in cards], ["Menu Items"])


if __name__ == "__main__":
    unittest.main()
