"""Generic paginated CRUD routes, one router per registered entity schema."""

from fastapi import APIRouter, Depends, File, HTTPException, Path, Query, Response, UploadFile
from sqlalchemy.orm import Session

from app.db.dependencies import get_db
from app.routers.auth import get_session_context
from app.schema.columns import EntitySchema
from app.schema.registry import ENTITY_SCHEMAS
from app.schemas.common import ApiResponse, DeleteResult
from app.schemas.table import (
    ColumnRead,
    ImportResult,
    PageLinkRead,
    PaginationRead,
    RecordWrite,
    TablePageRead,
    TableSchemaRead,
)
from app.services.crud_table import CrudTable, DraftValidationError
from app.services.exports import ExportedFile
from app.services.gateway import TableGateway

PageParam = Query(default=1, ge=1)


def page_read(table: CrudTable) -> TablePageRead:
    pagination = table.pagination
    return TablePageRead(
        title=table.schema.title,
        records=table.records,
        current_page=table.current_page,
        page_size=table.schema.page_size,
        total_count=table.total_count,
        total_pages=table.window.total_pages,
        pagination=PaginationRead(
            links=[PageLinkRead.model_validate(link) for link in pagination.links],
            previous_disabled=pagination.previous_disabled,
            next_disabled=pagination.next_disabled,
            visible=pagination.visible,
        ),
    )


def schema_read(schema: EntitySchema) -> TableSchemaRead:
    return TableSchemaRead(
        name=schema.name,
        title=schema.title,
        page_size=schema.page_size,
        columns=[
            ColumnRead(
                key=column.key,
                label=column.label,
                editable=column.editable,
                value_type=column.value_type.value,
                required=column.required,
            )
            for column in schema.columns
        ],
    )


def _raise_last_error(table: CrudTable) -> None:
    notice = table.notifications.last
    detail = notice.message if notice is not None and notice.level == "error" else "Request failed"
    raise HTTPException(status_code=400, detail=detail)


def _open_table(db: Session, schema: EntitySchema, page: int) -> CrudTable:
    table = CrudTable.open(db, schema, page=page)
    if table.notifications.last is not None:
        _raise_last_error(table)
    return table


def _fill_draft(table: CrudTable, payload: RecordWrite) -> None:
    unknown = {}
    for key, value in payload.values.items():
        try:
            table.set_field(key, value)
        except KeyError:
            unknown[key] = "Not an editable column"
    if unknown:
        raise DraftValidationError(unknown)


def _submit(table: CrudTable) -> ApiResponse[TablePageRead]:
    if not table.submit():
        if table.field_errors:
            raise DraftValidationError(table.field_errors)
        _raise_last_error(table)
    return ApiResponse(data=page_read(table), message=table.notifications.last.message)


def _download(exported: ExportedFile) -> Response:
    return Response(
        content=exported.content,
        media_type=exported.media_type,
        headers={"Content-Disposition": f'attachment; filename="{exported.filename}"'},
    )


def build_table_router(schema: EntitySchema) -> APIRouter:
    """Mount list/create/update/delete/export/import for ``schema`` under ``/{name}``."""

    router = APIRouter(prefix=f"/{schema.name}", dependencies=[Depends(get_session_context)])

    @router.get("/schema", response_model=ApiResponse[TableSchemaRead])
    def get_table_schema() -> ApiResponse[TableSchemaRead]:
        return ApiResponse(data=schema_read(schema))

    @router.get("", response_model=ApiResponse[TablePageRead])
    def get_table_page(page: int = PageParam, db: Session = Depends(get_db)) -> ApiResponse[TablePageRead]:
        """One page of records, newest first."""

        return ApiResponse(data=page_read(_open_table(db, schema, page)))

    @router.post("", response_model=ApiResponse[TablePageRead], status_code=201)
    def post_record(
        payload: RecordWrite,
        page: int = PageParam,
        db: Session = Depends(get_db),
    ) -> ApiResponse[TablePageRead]:
        """Create from dialog values, then return the re-fetched page."""

        table = CrudTable(schema=schema, gateway=TableGateway(db, schema.model), current_page=page)
        table.open_create()
        _fill_draft(table, payload)
        return _submit(table)

    @router.put("/{record_id}", response_model=ApiResponse[TablePageRead])
    def put_record(
        payload: RecordWrite,
        record_id: str = Path(..., min_length=1),
        page: int = PageParam,
        db: Session = Depends(get_db),
    ) -> ApiResponse[TablePageRead]:
        table = CrudTable(schema=schema, gateway=TableGateway(db, schema.model), current_page=page)
        try:
            table.open_edit(record_id)
        except LookupError as exc:
            raise HTTPException(status_code=404, detail=f"{schema.title} not found") from exc
        _fill_draft(table, payload)
        return _submit(table)

    @router.delete("/{record_id}", response_model=ApiResponse[DeleteResult])
    def delete_record(
        record_id: str = Path(..., min_length=1),
        page: int = PageParam,
        db: Session = Depends(get_db),
    ) -> ApiResponse[DeleteResult]:
        table = CrudTable(schema=schema, gateway=TableGateway(db, schema.model), current_page=page)
        if table.gateway.get(record_id) is None:
            raise HTTPException(status_code=404, detail=f"{schema.title} not found")
        if not table.delete(record_id):
            _raise_last_error(table)
        return ApiResponse(
            data=DeleteResult(id=record_id, deleted=True),
            message=f"{schema.title} deleted successfully",
        )

    @router.get("/export.xlsx")
    def export_workbook(page: int = PageParam, db: Session = Depends(get_db)) -> Response:
        """Spreadsheet of the requested page only."""

        return _download(_open_table(db, schema, page).export_workbook())

    @router.get("/export.pdf")
    def export_document(page: int = PageParam, db: Session = Depends(get_db)) -> Response:
        return _download(_open_table(db, schema, page).export_document())

    @router.post("/import", response_model=ApiResponse[ImportResult])
    def import_workbook(
        file: UploadFile = File(...),
        db: Session = Depends(get_db),
    ) -> ApiResponse[ImportResult]:
        """Insert every data row of the first sheet, or none of them."""

        table = CrudTable(schema=schema, gateway=TableGateway(db, schema.model))
        inserted = table.import_workbook(file.file.read())
        if inserted is None:
            _raise_last_error(table)
        return ApiResponse(data=ImportResult(inserted=inserted), message=f"Imported {inserted} records")

    return router


table_routers = [build_table_router(schema) for schema in ENTITY_SCHEMAS.values()]
