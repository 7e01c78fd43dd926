"""Route filter: the user's allow-list and the predicate applied to records."""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from pymuni.models.vehicle import VehicleRecord


def parse_allow_list(text: str) -> frozenset[str]:
    """Normalize comma-separated route ids: uppercase, trimmed, no empties."""
    return frozenset(entry.strip() for entry in text.upper().split(",") if entry.strip())


class FilterState(BaseModel):
    """Which routes the view is restricted to.

    Only user actions change it (see :func:`reduce_filter`); it survives
    across poll cycles until then.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    active: bool = False
    allow_list: frozenset[str] = frozenset()

    @field_validator("allow_list", mode="before")
    @classmethod
    def _normalize_entries(cls, value: Iterable[str]) -> frozenset[str]:
        if isinstance(value, str):
            return parse_allow_list(value)
        return frozenset(str(entry).strip().upper() for entry in value if str(entry).strip())

    @model_validator(mode="after")
    def _active_requires_routes(self) -> FilterState:
        if self.active and not self.allow_list:
            raise ValueError("an active filter needs at least one route id")
        return self


def passes(record: VehicleRecord, state: FilterState) -> bool:
    """Return ``True`` when *record* should be displayed under *state*."""
    if not record.is_displayable:
        return False
    if not state.active or not state.allow_list:
        return True
    return str(record.route_id).upper() in state.allow_list


def filter_records(records: Iterable[VehicleRecord], state: FilterState) -> list[VehicleRecord]:
    """Keep displayable records that pass *state*, in feed order."""
    return [record for record in records if passes(record, state)]


# ------------------------------------------------------------------
# User actions
# ------------------------------------------------------------------


@dataclasses.dataclass(frozen=True, slots=True)
class ApplyFilterText:
    """Commit the free-text route filter input."""

    text: str


@dataclasses.dataclass(frozen=True, slots=True)
class SelectRoute:
    """Restrict the view to a single route (e.g. a clicked route card)."""

    route_id: str


@dataclasses.dataclass(frozen=True, slots=True)
class ClearFilter:
    """Drop any route restriction."""


FilterAction = ApplyFilterText | SelectRoute | ClearFilter


def reduce_filter(state: FilterState, action: FilterAction) -> FilterState:
    """Return the filter state after *action*.

    Input that normalizes to no route ids (for example ``" , "``) leaves
    the current state unchanged; blank input clears it.
    """
    if isinstance(action, ClearFilter):
        return FilterState()

    if isinstance(action, SelectRoute):
        route_id = action.route_id.strip().upper()
        if not route_id:
            return state
        return FilterState(active=True, allow_list=frozenset({route_id}))

    if not action.text.strip():
        return FilterState()
    allow_list = parse_allow_list(action.text)
    if not allow_list:
        return state
    return FilterState(active=True, allow_list=allow_list)
