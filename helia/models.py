"""Plain data records shared by the request helpers."""

from __future__ import annotations

import dataclasses
from typing import Any


@dataclasses.dataclass
class Field:
    """A table column or form field, with its current value."""

    name: str
    label: str = ""
    value: str = ""


@dataclasses.dataclass(frozen=True)
class FieldError:
    """A validation problem attached to one field."""

    field: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message}


@dataclasses.dataclass
class Response:
    """The JSON body sent back to the browser after an action."""

    success: bool
    status_code: int
    message: str
    errors: list[FieldError] = dataclasses.field(default_factory=list)
    hx_trigger: str = "showMessage"

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "statusCode": self.status_code,
            "message": self.message,
            "errors": [error.to_dict() for error in self.errors],
            "hxTrigger": self.hx_trigger,
        }


@dataclasses.dataclass
class Dialog:
    """Settings for a confirmation or edit dialog driven by htmx."""

    id: str
    title: str
    ok_text: str
    cancel_text: str
    save_text: str
    hx_action_url: str
    hx_target: str
    hx_swap: str
    hx_request_type: str


@dataclasses.dataclass
class TableRow:
    """One rendered row of a listing table."""

    id: str
    fields: list[str] = dataclasses.field(default_factory=list)
    has_update: bool = True
    has_delete: bool = True


@dataclasses.dataclass
class TableData:
    """Everything a listing page needs: headers, rows and paging."""

    content_title: str
    table_id: str
    headers: list[Field]
    url_prefix: str
    page_size: int
    current_page: int
    total_pages: int
    total_records: int
    start_record: int
    end_record: int
    rows: list[TableRow] = dataclasses.field(default_factory=list)
    show_actions: bool = True