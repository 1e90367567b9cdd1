"""
Tests for the stock-entry pipeline: normalize, sort, filter, paginate.
"""
from datetime import date, datetime, timezone

import pytest

from ferreteria.core.errors import MalformedResponseError
from ferreteria.v1_0.helper.history import (
    HistoryFilters,
    SortConfig,
    apply_view,
    filter_movements,
    normalize_movement,
    normalize_movements,
    paginate,
    sort_movements,
)
from ferreteria.v1_0.helper.io import parse_timestamp

from conftest import TZ, raw_movement


def _codes(records):
    return [m.product_code for m in records]


class TestNormalize:
    """Raw endpoint records become MovementDTO."""

    def test_maps_wire_fields(self):
        m = normalize_movement(raw_movement(7, fecha="2024-01-15T10:30:00"), TZ)
        assert m.product_name == "Producto 7"
        assert m.product_code == "COD-007"
        assert m.quantity == 7
        assert m.previous_stock == 100
        assert m.new_stock == 107
        assert m.final_cost == 2.5
        assert m.operation == "entrada"
        assert m.operation_kind == "entrada"
        assert m.operation_label == "Entrada"
        assert m.quantity_label == "+7"

    def test_naive_timestamp_is_local_time(self):
        m = normalize_movement(raw_movement(1, fecha="2024-01-15T10:30:00"), TZ)
        assert (m.display_timestamp.hour, m.display_timestamp.minute) == (10, 30)
        assert m.sort_timestamp == datetime(2024, 1, 15, 14, 30, tzinfo=timezone.utc)

    def test_utc_suffix_is_converted(self):
        m = normalize_movement(raw_movement(1, fecha="2024-02-01T02:00:00Z"), TZ)
        assert m.display_timestamp.date() == date(2024, 1, 31)
        assert m.display_timestamp.hour == 22

    def test_epoch_milliseconds(self):
        display, sort = parse_timestamp(1705314600000, TZ)
        assert sort == datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)
        assert display.hour == 6

    def test_unknown_operation_is_adjustment(self):
        m = normalize_movement(raw_movement(1, operacion="correccion"), TZ)
        assert m.operation_kind == "ajuste"
        assert m.operation_label == "Ajuste"

    def test_bad_timestamp_is_malformed(self):
        with pytest.raises(MalformedResponseError):
            normalize_movement(raw_movement(1, fecha="no-es-fecha"), TZ)

    def test_missing_timestamp_is_malformed(self):
        raw = raw_movement(1)
        del raw["fecha"]
        with pytest.raises(MalformedResponseError):
            normalize_movements([raw], TZ)

    def test_key_is_unique_per_record(self, movements):
        assert len({m.key for m in movements}) == len(movements)


class TestSortConfig:
    """Header clicks toggle the sort."""

    def test_default_is_date_descending(self):
        assert SortConfig() == SortConfig("timestamp", "desc")

    def test_same_key_alternates(self):
        s = SortConfig().toggle("quantity")
        assert s == SortConfig("quantity", "asc")
        s = s.toggle("quantity")
        assert s == SortConfig("quantity", "desc")
        s = s.toggle("quantity")
        assert s == SortConfig("quantity", "asc")

    def test_new_key_starts_ascending(self):
        s = SortConfig("quantity", "desc").toggle("product_code")
        assert s == SortConfig("product_code", "asc")

    def test_date_column_toggles_from_default(self):
        assert SortConfig().toggle("timestamp") == SortConfig("timestamp", "asc")


class TestSortMovements:
    """Ordering by column."""

    def test_default_newest_first(self, movements):
        ordered = sort_movements(movements, SortConfig())
        stamps = [m.sort_timestamp for m in ordered]
        assert stamps == sorted(stamps, reverse=True)

    def test_numeric_ascending(self, movements):
        ordered = sort_movements(movements, SortConfig("quantity", "asc"))
        assert [m.quantity for m in ordered] == list(range(1, 26))

    def test_date_sorts_by_instant_not_text(self):
        records = normalize_movements(
            [
                raw_movement(1, fecha="2024-01-02T01:00:00Z"),
                raw_movement(2, fecha="2024-01-01T23:30:00"),
            ],
            TZ,
        )
        ordered = sort_movements(records, SortConfig("timestamp", "asc"))
        # 2024-01-02T01:00Z is 2024-01-01 21:00 in Caracas
        assert _codes(ordered) == ["COD-001", "COD-002"]

    def test_ties_keep_original_order(self):
        records = normalize_movements(
            [raw_movement(i, cantidad=5, codigoProducto=c) for i, c in enumerate("CAB", 1)],
            TZ,
        )
        assert _codes(sort_movements(records, SortConfig("quantity", "asc"))) == ["C", "A", "B"]
        assert _codes(sort_movements(records, SortConfig("quantity", "desc"))) == ["C", "A", "B"]

    def test_missing_values_sort_last_ascending(self):
        records = normalize_movements(
            [
                raw_movement(1, costoFinal=None),
                raw_movement(2, costoFinal=9.0),
                raw_movement(3, costoFinal=1.0),
            ],
            TZ,
        )
        ordered = sort_movements(records, SortConfig("final_cost", "asc"))
        assert [m.final_cost for m in ordered] == [1.0, 9.0, None]

    def test_does_not_mutate_input(self, movements):
        before = list(movements)
        sort_movements(movements, SortConfig("quantity", "asc"))
        assert movements == before


class TestFilter:
    """Search term and date range."""

    def test_search_is_case_insensitive_on_code(self):
        records = normalize_movements(
            [raw_movement(1, codigoProducto="abc-123"), raw_movement(2, codigoProducto="XYZ-9")],
            TZ,
        )
        assert _codes(filter_movements(records, HistoryFilters(search="ABC"))) == ["abc-123"]

    def test_search_ignores_product_name(self):
        records = normalize_movements([raw_movement(1, nombreProducto="ABC martillo")], TZ)
        assert filter_movements(records, HistoryFilters(search="martillo")) == []

    def test_empty_filters_keep_everything(self, movements):
        assert filter_movements(movements, HistoryFilters()) == movements

    def test_range_is_inclusive_on_local_date(self):
        records = normalize_movements(
            [
                raw_movement(1, fecha="2024-01-01T00:00:00"),
                raw_movement(2, fecha="2024-01-31T23:59:00"),
                raw_movement(3, fecha="2024-02-01T10:00:00"),
                raw_movement(4, fecha="2024-02-01T02:00:00Z"),
            ],
            TZ,
        )
        january = HistoryFilters(start=date(2024, 1, 1), end=date(2024, 1, 31))
        assert _codes(filter_movements(records, january)) == ["COD-001", "COD-002", "COD-004"]

    def test_open_ended_ranges(self, movements):
        only_start = filter_movements(movements, HistoryFilters(start=date(2024, 1, 20)))
        assert all(m.display_timestamp.date() >= date(2024, 1, 20) for m in only_start)
        only_end = filter_movements(movements, HistoryFilters(end=date(2024, 1, 5)))
        assert all(m.display_timestamp.date() <= date(2024, 1, 5) for m in only_end)
        assert len(only_start) + len(only_end) < len(movements)

    def test_filters_commute(self, movements):
        by_code = HistoryFilters(search="COD-01")
        by_date = HistoryFilters(start=date(2024, 1, 10), end=date(2024, 1, 15))
        both = HistoryFilters(search="COD-01", start=date(2024, 1, 10), end=date(2024, 1, 15))
        a = filter_movements(filter_movements(movements, by_code), by_date)
        b = filter_movements(filter_movements(movements, by_date), by_code)
        assert a == b == filter_movements(movements, both)
        assert a

    def test_active_flag(self):
        assert not HistoryFilters().active
        assert HistoryFilters(search="a").active
        assert HistoryFilters(end=date(2024, 1, 1)).active


class TestPaginate:
    """Fixed-size pages."""

    def test_second_page_of_25(self, movements):
        ordered = sort_movements(movements, SortConfig("quantity", "asc"))
        page = paginate(ordered, 2, 10)
        assert [m.quantity for m in page.items] == list(range(11, 21))
        assert page.total == 25
        assert page.total_pages == 3
        assert page.has_next and page.has_prev

    def test_last_page_is_partial(self, movements):
        page = paginate(movements, 3, 10)
        assert len(page.items) == 5
        assert not page.has_next

    def test_out_of_range_page_is_empty(self, movements):
        page = paginate(movements, 4, 10)
        assert page.items == []
        assert page.total == 25

    def test_empty_set(self):
        page = paginate([], 1, 10)
        assert page.items == []
        assert page.total_pages == 0

    def test_rejects_non_positive_size(self, movements):
        with pytest.raises(ValueError):
            paginate(movements, 1, 0)


class TestApplyView:
    """Filter, sort and page together."""

    def test_visible_set_and_page(self, movements):
        visible, page = apply_view(
            movements,
            filters=HistoryFilters(search="COD-00"),
            sort=SortConfig("quantity", "desc"),
            page=1,
            page_size=5,
        )
        assert [m.quantity for m in visible] == list(range(9, 0, -1))
        assert [m.quantity for m in page.items] == [9, 8, 7, 6, 5]
        assert page.total == 9
        assert page.total_pages == 2
