from __future__ import annotations

import pytest
from pydantic import ValidationError

from pymuni.models.vehicle import VehicleRecord
from pymuni.state.filter import (
    ApplyFilterText,
    ClearFilter,
    FilterState,
    SelectRoute,
    filter_records,
    parse_allow_list,
    passes,
    reduce_filter,
)


def _record(route_id: str | None) -> VehicleRecord:
    return VehicleRecord(route_id=route_id, lat=37.77, lon=-122.42)


def _batch() -> list[VehicleRecord]:
    return [_record(r) for r in ("5", "n", "38R", None, "5", "KT", "N")]


def test_parse_allow_list_normalizes_entries() -> None:
    assert parse_allow_list(" 5, 38r ,,n , ") == frozenset({"5", "38R", "N"})
    assert parse_allow_list(" , ,") == frozenset()


def test_filter_state_normalizes_allow_list() -> None:
    state = FilterState(active=True, allow_list=["n", " 5 ", ""])
    assert state.allow_list == frozenset({"N", "5"})


def test_active_filter_requires_routes() -> None:
    with pytest.raises(ValidationError):
        FilterState(active=True, allow_list=[])


def test_inactive_filter_passes_every_displayable_record() -> None:
    state = FilterState()
    assert passes(_record("5"), state)
    assert passes(_record("anything"), state)


def test_record_without_route_never_passes() -> None:
    assert not passes(_record(None), FilterState())
    assert not passes(_record(None), FilterState(active=True, allow_list={"5"}))


def test_matching_is_case_insensitive() -> None:
    state = FilterState(active=True, allow_list={"N"})
    assert passes(_record("n"), state)
    assert passes(_record("N"), state)
    assert not passes(_record("NX"), state)


def test_filter_records_keeps_feed_order() -> None:
    state = FilterState(active=True, allow_list={"N", "5"})
    assert [r.route_id for r in filter_records(_batch(), state)] == ["5", "n", "5", "N"]


@pytest.mark.parametrize("allow", [{"5"}, {"N", "KT"}, {"38R", "5", "N"}, {"NOPE"}])
def test_filtering_is_idempotent(allow: set[str]) -> None:
    state = FilterState(active=True, allow_list=allow)
    once = filter_records(_batch(), state)
    assert filter_records(once, state) == once


class TestReduceFilter:
    def test_apply_text_activates(self) -> None:
        state = reduce_filter(FilterState(), ApplyFilterText("5, n"))
        assert state == FilterState(active=True, allow_list={"5", "N"})

    def test_blank_text_clears(self) -> None:
        active = FilterState(active=True, allow_list={"5"})
        assert reduce_filter(active, ApplyFilterText("   ")) == FilterState()

    def test_text_with_only_separators_keeps_previous(self) -> None:
        active = FilterState(active=True, allow_list={"5"})
        assert reduce_filter(active, ApplyFilterText(" , ,")) is active

    def test_select_route_uppercases(self) -> None:
        state = reduce_filter(FilterState(), SelectRoute(" 38r "))
        assert state.active
        assert state.allow_list == frozenset({"38R"})

    def test_select_blank_route_is_ignored(self) -> None:
        active = FilterState(active=True, allow_list={"5"})
        assert reduce_filter(active, SelectRoute("")) is active

    def test_clear(self) -> None:
        active = FilterState(active=True, allow_list={"5"})
        assert reduce_filter(active, ClearFilter()) == FilterState()
