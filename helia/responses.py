"""Response messages, dialog settings and small request utilities."""

from __future__ import annotations

import dataclasses
import enum
import re
from collections.abc import Iterable

from helia.models import Dialog, FieldError, Response

ID_DRZAVE = "iddrzave"
ID_BANKE = "idbanke"
ID_SIFOP = "idsifop"
ID_PARTNERI = "idpartneri"
ID_TIPDOK = "idtipdok"
ID_DOKVRSTA = "dokvrstaid"
ID_POPDV = "popdvid"
ID_ORGJED = "idorgjed"
ID_MESTOTR = "mestotrid"
ID_SIFPLIZV = "sifplizvid"
ID_FVKNJRAC = "idfvknjrac"
ID_SIFMESTO = "sifm"
ID_BNKIZV = "bnkizvid"
ID_FVEPDV = "fvepdvid"
ID_FKPL = "idfkpl"
ID_FNAL = "idfnal"
ID_OAMGRP = "oamgrpid"

PARSE_FORM_ERR_MSG = "Parsiranje forme nije uspelo."
GET_ID_FROM_URL_ERR_MSG = "Neuspešno preuzimanje ID-a iz URL-a."
FORM_DECODE_ERR_MSG = "Neuspešno dekodiranje forme."
VALIDATION_ERR_MSG = "Greške prilkom validacije"
SAVE_DATA_ERR_MSG = "Greška prilikom upisa podataka"
SAVE_DATA_OK_MSG = "Uspešno upisani podaci"
DELETE_DATA_ERR_MSG = "Greška prilikom brisanja podataka. Greska: {}"
DELETE_DATA_OK_MSG = "Uspešno obrisani podaci"
INVALID_ID_ERR_MSG = "Invalid ID"
READ_DATA_ERR_MSG = "Greška prilikom čitanja podataka"
READ_DATA_OK_MSG = "Uspešno učitani podaci"
RENDER_TEMPLATE_ERR = "Error rendering template"

HX_TRIGGER = "showMessage"

_INTEGER = re.compile(r"[+-]?[0-9]+")


class Action(str, enum.Enum):
    """The kind of change a dialog is confirming."""

    DELETE = "DELETE"
    ADD = "ADD"
    UPDATE = "UPDATE"


@dataclasses.dataclass(frozen=True)
class Period:
    """The working accounting year (god) and company number (kar)."""

    god: int
    kar: int


_period = Period(god=2024, kar=1)


def set_god_kar(god: int, kar: int) -> None:
    """Select the accounting year and company used from now on."""
    global _period
    _period = Period(god=god, kar=kar)


def current_period() -> Period:
    """Return the accounting year and company currently selected."""
    return _period


def create_response(
    success: bool, errors: Iterable[FieldError], message: str, status_code: int
) -> Response:
    """Build the JSON response body for an action."""
    return Response(
        success=success,
        status_code=status_code,
        message=message,
        errors=list(errors),
        hx_trigger=HX_TRIGGER,
    )


def set_dialog_values(id: str, action_url: str, title: str, request_type: str) -> Dialog:
    """Build dialog settings with the standard button texts and htmx target."""
    return Dialog(
        id=id,
        title=title,
        ok_text="Potvrdi",
        cancel_text="Odustani",
        save_text="Sacuvaj",
        hx_action_url=action_url,
        hx_target="#info-message",
        hx_swap="innerHTML",
        hx_request_type=request_type,
    )


def parse_id(value: str | None) -> int:
    """Parse a strict base-10 integer; raise ValueError on anything else."""
    if value is None or not _INTEGER.fullmatch(value):
        raise ValueError(f"invalid integer: {value!r}")
    return int(value)


def extract_html(component: str, target_id: str, tag_type: str) -> str:
    """Return the inner HTML of the first <tag id="target_id"> element, or ''."""
    start_tag = f'<{tag_type} id="{target_id}">'
    end_tag = f"</{tag_type}>"
    start = component.find(start_tag)
    if start == -1:
        return ""
    start += len(start_tag)
    end = component.find(end_tag, start)
    if end == -1:
        return ""
    return component[start:end]