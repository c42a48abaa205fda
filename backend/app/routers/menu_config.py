"""Navigation menu configuration routes (administrators only)."""

from fastapi import APIRouter, Depends, HTTPException, Path, Query
from sqlalchemy.orm import Session

from app.db.dependencies import get_db
from app.routers.auth import require_admin
from app.schemas.common import ApiResponse, DeleteResult
from app.schemas.menu_item import MenuItemDraft, MenuItemForm, MenuItemRead
from app.services.menu_config import (
    create_menu_item,
    delete_menu_item,
    get_menu_item,
    list_menu_items,
    menu_item_draft,
    new_menu_item_draft,
    update_menu_item,
)

router = APIRouter(prefix="/menu-config", dependencies=[Depends(require_admin)])

MenuItemIdParam = Path(..., min_length=1)


@router.get("", response_model=ApiResponse[list[MenuItemRead]])
def get_menu_items(db: Session = Depends(get_db)) -> ApiResponse[list[MenuItemRead]]:
    """Menu entries in display order."""

    return ApiResponse(data=[MenuItemRead.model_validate(item) for item in list_menu_items(db)])


@router.get("/draft", response_model=ApiResponse[MenuItemDraft])
def get_new_draft(db: Session = Depends(get_db)) -> ApiResponse[MenuItemDraft]:
    """Defaults for a new entry, placed after the existing ones."""

    return ApiResponse(data=new_menu_item_draft(db))


@router.get("/{item_id}/draft", response_model=ApiResponse[MenuItemDraft])
def get_edit_draft(item_id: str = MenuItemIdParam, db: Session = Depends(get_db)) -> ApiResponse[MenuItemDraft]:
    item = get_menu_item(db, item_id)
    if item is None:
        raise HTTPException(status_code=404, detail="Menu item not found")
    return ApiResponse(data=menu_item_draft(item))


@router.post("", response_model=ApiResponse[MenuItemRead], status_code=201)
def post_menu_item(payload: MenuItemForm, db: Session = Depends(get_db)) -> ApiResponse[MenuItemRead]:
    item = create_menu_item(db, payload)
    return ApiResponse(data=MenuItemRead.model_validate(item), message="Menu item created successfully")


@router.put("/{item_id}", response_model=ApiResponse[MenuItemRead])
def put_menu_item(
    payload: MenuItemForm,
    item_id: str = MenuItemIdParam,
    db: Session = Depends(get_db),
) -> ApiResponse[MenuItemRead]:
    item = update_menu_item(db, item_id, payload)
    return ApiResponse(data=MenuItemRead.model_validate(item), message="Menu item updated successfully")


@router.delete("/{item_id}", response_model=ApiResponse[DeleteResult])
def remove_menu_item(
    item_id: str = MenuItemIdParam,
    confirm: bool = Query(default=False),
    db: Session = Depends(get_db),
) -> ApiResponse[DeleteResult]:
    if not confirm:
        raise HTTPException(status_code=428, detail="Confirm deletion of this menu item")
    delete_menu_item(db, item_id)
    return ApiResponse(data=DeleteResult(id=item_id, deleted=True), message="Menu item deleted successfully")
