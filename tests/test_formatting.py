import dataclasses
import datetime
from typing import Optional

import pytest

from helia.formatting import (
    FormDecodeError,
    decode_form,
    format_number_with_locale,
    get_field_by_name_case_insensitive,
    get_formatted_value,
)


@dataclasses.dataclass
class Drzava:
    id_drzave: int
    naziv: str
    kurs: float = 0.0
    aktivna: bool = False
    datum: Optional[datetime.date] = None
    oznake: list = dataclasses.field(default_factory=list)


class Plain:
    def __init__(self):
        self.IdBanke = 9
        self.naziv = "Banka"


@pytest.fixture
def no_locale(monkeypatch):
    for variable in ("LANGUAGE", "LC_ALL", "LC_MESSAGES", "LANG"):
        monkeypatch.delenv(variable, raising=False)


def test_field_lookup_ignores_case_and_underscores():
    entity = Drzava(id_drzave=3, naziv="Srbija")
    assert get_field_by_name_case_insensitive(entity, "iddrzave") == (3, "int")
    assert get_field_by_name_case_insensitive(entity, "NAZIV") == ("Srbija", "str")


def test_field_lookup_on_plain_object():
    assert get_field_by_name_case_insensitive(Plain(), "idbanke") == (9, "int")


def test_field_lookup_missing():
    assert get_field_by_name_case_insensitive(Plain(), "nema") is None


def test_formatted_bool_and_string():
    assert get_formatted_value("bool", True) == "true"
    assert get_formatted_value("bool", False) == "false"
    assert get_formatted_value("string", "abc") == "abc"


def test_formatted_date():
    day = datetime.date(2024, 3, 5)
    assert get_formatted_value("date", day) == day.isoformat()
    moment = datetime.datetime(2024, 3, 5, 14, 30)
    assert get_formatted_value("datetime", moment) == day.isoformat()


def test_formatted_date_rejects_non_date():
    with pytest.raises(TypeError):
        get_formatted_value("time", "2024-03-05")


def test_formatted_numbers_without_locale(no_locale):
    assert get_formatted_value("int", 1234567) == str(1234567)
    assert get_formatted_value("float64", 1234.5) == "1234.50"


def test_formatted_unknown_type_uses_str():
    assert get_formatted_value("nonetype", None) == "None"


def test_english_grouping():
    assert format_number_with_locale(1234567, "int", "en-US") == "1,234,567"


@pytest.mark.parametrize("locale_name", ["en-US", "sr_RS.UTF-8", "de-DE", "fr-FR", "xx"])
def test_grouping_keeps_digits(locale_name):
    text = format_number_with_locale(9876543210, "int", locale_name)
    assert "".join(ch for ch in text if ch.isdigit()) == "9876543210"


def test_serbian_float_uses_comma_decimal():
    text = format_number_with_locale(1234.5, "float", "sr-RS")
    assert text.endswith(",50")
    assert text.replace(".", "").replace(",", ".") == "1234.50"


def test_negative_number_keeps_sign():
    assert format_number_with_locale(-1000, "int", "en").startswith("-")


def test_invalid_locale_is_plain():
    assert format_number_with_locale(1234567, "int", "C") == str(1234567)


def test_other_number_type_uses_str():
    assert format_number_with_locale("x", "other", "en") == "x"


def test_locale_from_environment(monkeypatch, no_locale):
    monkeypatch.setenv("LANG", "en_US.UTF-8")
    assert "," in format_number_with_locale(1234567, "int")


def test_decode_form_converts_types():
    form = {
        "IdDrzave": ["5"],
        "naziv": "Srbija",
        "kurs": "117.25",
        "aktivna": "on",
        "datum": "2024-03-05",
        "oznake": ["a", "b"],
    }
    entity = decode_form(Drzava, form)
    assert entity == Drzava(
        id_drzave=5,
        naziv="Srbija",
        kurs=117.25,
        aktivna=True,
        datum=datetime.date(2024, 3, 5),
        oznake=["a", "b"],
    )


def test_decode_form_missing_fields_get_zero_values():
    entity = decode_form(Drzava, {})
    assert entity.id_drzave == 0
    assert entity.naziv == ""
    assert entity.oznake == []


def test_decode_form_uses_last_value_and_skips_empty():
    entity = decode_form(Drzava, {"naziv": ["a", "b"], "kurs": "", "datum": ""})
    assert entity.naziv == "b"
    assert entity.kurs == 0.0
    assert entity.datum is None


def test_decode_form_unknown_key():
    with pytest.raises(FormDecodeError):
        decode_form(Drzava, {"nepoznato": "1"})


@pytest.mark.parametrize("form", [{"id_drzave": "x"}, {"aktivna": "maybe"}, {"kurs": "abc"}])
def test_decode_form_bad_values(form):
    with pytest.raises(FormDecodeError):
        decode_form(Drzava, form)


def test_decode_form_alias():
    @dataclasses.dataclass
    class Banka:
        naziv: str = dataclasses.field(default="", metadata={"form": "ime"})

    assert decode_form(Banka, {"ime": "Prva"}).naziv == "Prva"


def test_decode_form_requires_dataclass():
    with pytest.raises(TypeError):
        decode_form(Plain, {})