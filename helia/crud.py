"""Request handlers shared by every list, create, update and delete screen."""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping, Sequence
from typing import Any, Generic, Protocol, TypeVar

from helia.formatting import (
    FormDecodeError,
    decode_form,
    get_field_by_name_case_insensitive,
    get_formatted_value,
)
from helia.models import Dialog, Field, FieldError, TableData, TableRow
from helia.pagination import get_pagination_data, set_table_basic_data
from helia.responses import (
    DELETE_DATA_ERR_MSG,
    DELETE_DATA_OK_MSG,
    FORM_DECODE_ERR_MSG,
    GET_ID_FROM_URL_ERR_MSG,
    INVALID_ID_ERR_MSG,
    READ_DATA_ERR_MSG,
    SAVE_DATA_ERR_MSG,
    SAVE_DATA_OK_MSG,
    VALIDATION_ERR_MSG,
    Action,
    create_response,
    parse_id,
    set_dialog_values,
)

T = TypeVar("T")

NO_RECORD_FOR_UPDATE_MSG = "No record for update is available"


class Service(Protocol[T]):
    """Storage operations for one kind of entity.

    Failures are raised as exceptions; validation problems are returned
    as a list of FieldError.
    """

    def delete(self, id_type: str, id: int) -> None: ...

    def get_by_id(self, id_field: str, id: int) -> T: ...

    def map_entity_to_values(self, entity: T, table_fields: Sequence[Field]) -> list[Field]: ...

    def create(self, entity: T, table_fields: Sequence[Field]) -> list[FieldError]: ...

    def update(
        self, entity: T, id_field: str, id: int, table_fields: Sequence[Field]
    ) -> list[FieldError]: ...

    def get_total_records(self, table_fields: Sequence[Field], search: str) -> int: ...

    def get_all(
        self,
        limit: int,
        offset: int,
        table_fields: Sequence[Field],
        id_field: str,
        search: str,
    ) -> list[T]: ...


@dataclasses.dataclass
class Request:
    """The parts of an incoming request the handlers look at."""

    path: str = "/"
    query: Mapping[str, Any] = dataclasses.field(default_factory=dict)
    path_params: Mapping[str, str] = dataclasses.field(default_factory=dict)
    form: Mapping[str, Any] = dataclasses.field(default_factory=dict)

    def query_value(self, key: str) -> str:
        """Return the first value of a query parameter, or ''."""
        value = self.query.get(key, "")
        if isinstance(value, (list, tuple)):
            return value[0] if value else ""
        return value or ""


@dataclasses.dataclass
class DialogContent:
    """A dialog to render, with the fields it shows and the action it confirms."""

    dialog: Dialog
    fields: list[Field]
    action: Action


@dataclasses.dataclass
class HandlerResult(Generic[T]):
    """The status code and body a handler produced."""

    status_code: int
    body: Any


def _error(status_code: int, message: str, errors: Sequence[FieldError] = ()) -> HandlerResult:
    return HandlerResult(status_code, create_response(False, errors, message, status_code))


def _path_id(request: Request) -> int:
    return parse_id(request.path_params.get("id"))


def delete_helper(request: Request, service: Service[T], id_type: str) -> HandlerResult:
    """Delete the entity whose id is in the URL path."""
    try:
        id = _path_id(request)
    except ValueError:
        return _error(400, GET_ID_FROM_URL_ERR_MSG)
    try:
        service.delete(id_type, id)
    except Exception as exc:
        return _error(400, DELETE_DATA_ERR_MSG.format(exc))
    return HandlerResult(200, create_response(True, [], DELETE_DATA_OK_MSG, 200))


def confirm_delete_helper(request: Request, table_fields: Sequence[Field]) -> HandlerResult:
    """Prepare the dialog asking to confirm a delete."""
    id_text = request.query_value("id")
    url = request.query_value("url")
    try:
        id = parse_id(id_text)
    except ValueError:
        return _error(400, INVALID_ID_ERR_MSG)
    dialog = set_dialog_values(id_text, f"{url}{id}", "Brisanje podataka", "hx-delete")
    return HandlerResult(200, DialogContent(dialog, list(table_fields), Action.DELETE))


def confirm_add_helper(url: str, table_fields: Sequence[Field]) -> HandlerResult:
    """Prepare an empty form for entering a new record."""
    fields = [dataclasses.replace(field, value="") for field in table_fields]
    dialog = set_dialog_values("", url, "Unos novih podataka", "hx-post")
    return HandlerResult(200, DialogContent(dialog, fields, Action.ADD))


def confirm_update_helper(
    request: Request, service: Service[T], table_fields: Sequence[Field], id_field: str
) -> HandlerResult:
    """Prepare a form filled with the current values of the record to edit."""
    id_text = request.query_value("id")
    url = request.query_value("url")
    try:
        id = parse_id(id_text)
    except ValueError:
        return _error(400, INVALID_ID_ERR_MSG)
    try:
        entity = service.get_by_id(id_field, id)
    except Exception:
        return HandlerResult(400, NO_RECORD_FOR_UPDATE_MSG)
    fields = service.map_entity_to_values(entity, table_fields)
    dialog = set_dialog_values(id_text, f"{url}{id}", "Izmena podataka", "hx-put")
    return HandlerResult(200, DialogContent(dialog, list(fields), Action.UPDATE))


def create_helper(
    request: Request, entity_type: type[T], service: Service[T], table_fields: Sequence[Field]
) -> HandlerResult:
    """Decode the submitted form into a new entity and store it."""
    try:
        entity = decode_form(entity_type, request.form)
    except FormDecodeError:
        return _error(400, FORM_DECODE_ERR_MSG)
    fields = service.map_entity_to_values(entity, table_fields)
    try:
        field_errors = service.create(entity, fields)
    except Exception:
        return _error(500, SAVE_DATA_ERR_MSG)
    if field_errors:
        return _error(422, VALIDATION_ERR_MSG, field_errors)
    return HandlerResult(201, create_response(True, [], SAVE_DATA_OK_MSG, 201))


def update_helper(
    request: Request,
    entity_type: type[T],
    service: Service[T],
    table_fields: Sequence[Field],
    id_field: str,
) -> HandlerResult:
    """Decode the submitted form and store it over the record in the URL path."""
    try:
        id = _path_id(request)
    except ValueError:
        return _error(400, GET_ID_FROM_URL_ERR_MSG)
    try:
        entity = decode_form(entity_type, request.form)
    except FormDecodeError:
        return _error(400, FORM_DECODE_ERR_MSG)
    fields = service.map_entity_to_values(entity, table_fields)
    try:
        field_errors = service.update(entity, id_field, id, fields)
    except Exception:
        return _error(500, SAVE_DATA_ERR_MSG)
    if field_errors:
        return _error(422, VALIDATION_ERR_MSG, field_errors)
    return HandlerResult(201, create_response(True, [], SAVE_DATA_OK_MSG, 201))


def get_all_entity_helper(
    request: Request,
    service: Service[T],
    table_fields: Sequence[Field],
    content_title: str,
    table_id: str,
    url_prefix: str,
    id_field: str,
    has_update: bool = True,
    has_delete: bool = True,
) -> HandlerResult:
    """Load one page of entities, filtered by the 'query' parameter, as a table."""
    search = request.query_value("query")
    try:
        total_records = service.get_total_records(table_fields, search)
    except Exception:
        return _error(500, READ_DATA_ERR_MSG)

    page = get_pagination_data(request.query, total_records)
    try:
        entities = service.get_all(
            page.page_size,
            (page.current_page - 1) * page.page_size,
            table_fields,
            id_field,
            search,
        )
    except Exception:
        return _error(500, READ_DATA_ERR_MSG)

    table: TableData = set_table_basic_data(
        content_title,
        table_id,
        table_fields,
        url_prefix,
        page.page_size,
        page.current_page,
        page.total_pages,
        total_records,
    )
    for entity in entities:
        found_id = get_field_by_name_case_insensitive(entity, id_field)
        row_id = str(found_id[0]) if found_id is not None else ""
        cells: list[str] = []
        for field in table_fields:
            found = get_field_by_name_case_insensitive(entity, field.name)
            if found is None:
                continue
            value, type_name = found
            try:
                cells.append(get_formatted_value(type_name, value))
            except (TypeError, ValueError):
                return _error(500, f"Error formatting value: {value}")
        table.rows.append(
            TableRow(id=row_id, fields=cells, has_update=has_update, has_delete=has_delete)
        )
    return HandlerResult(200, table)


def get_entity_helper(request: Request, service: Service[T], id_field: str) -> HandlerResult:
    """Load the entity whose id is in the URL path."""
    try:
        id = _path_id(request)
    except ValueError:
        return _error(400, GET_ID_FROM_URL_ERR_MSG)
    try:
        entity = service.get_by_id(id_field, id)
    except Exception:
        return _error(500, READ_DATA_ERR_MSG)
    return HandlerResult(200, entity)