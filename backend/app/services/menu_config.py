"""Navigation menu configuration services."""

from __future__ import annotations

from typing import Any

from sqlalchemy.orm import Session

from app.models.menu_item import MenuItem
from app.schemas.menu_item import MenuItemDraft, MenuItemForm
from app.services.gateway import TableGateway


def list_menu_items(db: Session) -> list[MenuItem]:
    """Entries in display order."""

    return TableGateway(db, MenuItem).list_all(MenuItem.display_order.asc(), MenuItem.created_at.asc())


def new_menu_item_draft(db: Session) -> MenuItemDraft:
    """Defaults for the create dialog; new entries go to the end of the menu."""

    return MenuItemDraft(display_order=TableGateway(db, MenuItem).count())


def menu_item_draft(item: MenuItem) -> MenuItemDraft:
    """Seed the edit dialog from a stored entry, splitting roles into the two checkboxes."""

    return MenuItemDraft(
        title=item.title,
        description=item.description,
        icon=item.icon,
        path=item.path,
        display_order=item.display_order,
        is_active=item.is_active,
        visible_to_admin="admin" in item.visible_to_roles,
        visible_to_user="user" in item.visible_to_roles,
    )


def create_menu_item(db: Session, form: MenuItemForm) -> MenuItem:
    return TableGateway(db, MenuItem).create(_menu_fields(form))


def update_menu_item(db: Session, item_id: str, form: MenuItemForm) -> MenuItem:
    return TableGateway(db, MenuItem).update(item_id, _menu_fields(form))


def delete_menu_item(db: Session, item_id: str) -> None:
    TableGateway(db, MenuItem).delete(item_id)


def get_menu_item(db: Session, item_id: str) -> MenuItem | None:
    return TableGateway(db, MenuItem).get(item_id)


def _menu_fields(form: MenuItemForm) -> dict[str, Any]:
    return {
        "title": form.title,
        "description": form.description,
        "icon": form.icon,
        "path": form.path,
        "display_order": form.display_order,
        "is_active": form.is_active,
        "visible_to_roles": form.visible_to_roles(),
    }
