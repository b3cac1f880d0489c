import pytest

from helia.models import Field
from helia.pagination import (
    DEFAULT_PAGE_SIZE,
    Page,
    add,
    create_func_map,
    ge,
    get_pagination_data,
    gt,
    le,
    lt,
    seq,
    set_table_basic_data,
    sub,
)


def test_defaults_without_parameters():
    page = get_pagination_data({}, 0)
    assert page == Page(current_page=1, page_size=DEFAULT_PAGE_SIZE, total_pages=0)
    assert page.page_size == 20


def test_invalid_page_size_uses_default():
    page = get_pagination_data({"pageSize": "abc"}, 100)
    assert page.page_size == DEFAULT_PAGE_SIZE


def test_invalid_or_low_page_becomes_first():
    assert get_pagination_data({"page": "x"}, 100).current_page == 1
    assert get_pagination_data({"page": "-4"}, 100).current_page == 1


def test_page_clamped_to_last_page():
    page = get_pagination_data({"page": "99", "pageSize": "20"}, 45)
    assert page.current_page == page.total_pages
    assert (page.total_pages - 1) * page.page_size < 45 <= page.total_pages * page.page_size


def test_page_not_clamped_when_no_records():
    page = get_pagination_data({"page": "5"}, 0)
    assert page.current_page == 5
    assert page.total_pages == 0


def test_list_values_use_first():
    page = get_pagination_data({"page": ["2", "9"], "pageSize": ["10"]}, 100)
    assert page.current_page == 2
    assert page.page_size == 10


def test_zero_page_size_rejected():
    with pytest.raises(ValueError):
        get_pagination_data({"pageSize": "0"}, 10)


@pytest.mark.parametrize("total", [1, 19, 20, 21, 40, 41, 1000])
def test_total_pages_covers_all_records(total):
    page = get_pagination_data({}, total)
    assert (page.total_pages - 1) * page.page_size < total <= page.total_pages * page.page_size


def test_table_basic_data_last_page_partial():
    headers = [Field("naziv"), Field("oznaka")]
    table = set_table_basic_data("Države", "drzave", headers, "/drzave", 20, 3, 3, 45)
    assert table.start_record == 41
    assert table.end_record == 45
    assert table.headers == headers
    assert table.rows == []
    assert table.show_actions is True


def test_table_basic_data_full_page():
    table = set_table_basic_data("T", "t", [], "/t", 10, 2, 5, 50)
    assert table.start_record == 11
    assert table.end_record == 20
    assert table.end_record - table.start_record + 1 == table.page_size


def test_arithmetic_and_comparisons():
    assert add(2, 3) == 5
    assert sub(2, 3) == -1
    assert le(2, 2) and ge(2, 2)
    assert lt(1, 2) and not lt(2, 2)
    assert gt(3, 2) and not gt(2, 2)


def test_seq():
    assert seq(3) == [1, 2, 3]
    assert seq(0) == []


def test_func_map():
    funcs = create_func_map()
    assert set(funcs) == {"add", "sub", "seq", "gt", "lt", "ge", "le", "con"}
    assert funcs["con"]("drzave/all", "all") is True
    assert funcs["con"]("drzave", "all") is False
    assert funcs["seq"](2) == [1, 2]