# helia

Helpers for the request handlers of a bookkeeping web application. The
package covers the plumbing between an incoming request, a data service
and the dialogs and tables shown to the user.

## Modules

- `helia.models` holds the plain data records: `Field`, `FieldError`,
  `Response`, `Dialog`, `TableRow` and `TableData`. `Response.to_dict()`
  and `FieldError.to_dict()` give JSON-ready dictionaries (keys such as
  `statusCode` and `hxTrigger`).
- `helia.responses` holds the user-facing messages and the entity id
  names. It builds response bodies with `create_response` and dialog
  settings with `set_dialog_values`. `parse_id` parses a strict base-10
  integer and raises `ValueError` otherwise. `extract_html` returns the
  inner HTML of the first `<tag id="...">` element, or an empty string.
  The working accounting year and company number are kept as a `Period`,
  changed with `set_god_kar` and read with `current_period`; the default
  is year 2024, company 1. The `Action` enum lists `DELETE`, `ADD` and
  `UPDATE`.
- `helia.pagination` turns the `page` and `pageSize` query parameters
  into a `Page` with `get_pagination_data` (default page size 20; the
  page is clamped into range). `set_table_basic_data` builds an empty
  `TableData` with headers and the record range filled in. It also
  provides the template helpers `add`, `sub`, `lt`, `le`, `gt`, `ge`,
  `seq` and `create_func_map`, which returns them by name together with
  `con` (substring test).
- `helia.formatting` formats table cells with `get_formatted_value` and
  numbers with `format_number_with_locale`, which groups digits for the
  given locale or the one in the environment (`LANGUAGE`, `LC_ALL`,
  `LC_MESSAGES`, `LANG`) and writes floats to two decimals.
  `get_field_by_name_case_insensitive` finds an attribute ignoring case
  and underscores. `decode_form` builds a dataclass instance from
  submitted form values and raises `FormDecodeError` on unknown keys or
  bad values.
- `helia.crud` has the shared handlers `delete_helper`,
  `confirm_delete_helper`, `confirm_add_helper`, `confirm_update_helper`,
  `create_helper`, `update_helper`, `get_all_entity_helper` and
  `get_entity_helper`. They take a `Request`, work against any object
  following the `Service` protocol, and return a `HandlerResult` whose
  body is a `Response`, a `DialogContent`, a `TableData` or the loaded
  entity.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
from helia.models import Field
from helia.pagination import get_pagination_data, set_table_basic_data

page = get_pagination_data({"page": "2", "pageSize": "10"}, total_records=35)
table = set_table_basic_data(
    "Countries", "countries", [Field(name="Name")], "/countries/",
    page.page_size, page.current_page, page.total_pages, 35,
)
```

Here `table.start_record` is 11 and `table.end_record` is 20.

## What this package does not do

It has no web server, no routing, no HTML templates and no database
access. The handlers return data for the caller to render or serialise,
and storage is whatever object the caller passes in as the `Service`.