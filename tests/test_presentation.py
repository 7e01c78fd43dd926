from __future__ import annotations

import io
from datetime import UTC, datetime

from pymuni.models.route import FeedSummary, RouteAggregate
from pymuni.presentation import (
    LEGEND,
    TextPresenter,
    format_legend,
    format_route_card,
    format_summary,
    format_vehicle_count,
)


def _summary() -> FeedSummary:
    return FeedSummary.build(
        [
            ("5", RouteAggregate(count=2, name="Fulton", color="005B95", route_type=3)),
            ("N", RouteAggregate(count=1, name="Judah", color="cccccc", route_type=0)),
        ],
        last_updated=datetime(2026, 1, 1, 12, 30, 5, tzinfo=UTC),
    )


def test_vehicle_count_pluralization() -> None:
    assert format_vehicle_count(1) == "1 vehicle"
    assert format_vehicle_count(2) == "2 vehicles"


def test_route_card() -> None:
    route = RouteAggregate(count=2, name="Fulton", color="005B95", route_type=3)
    assert format_route_card("5", route) == "[   5] #005B95  Fulton - 2 vehicles"


def test_format_summary() -> None:
    text = format_summary(_summary(), tz=UTC)

    assert text.splitlines() == [
        "Updated 12:30:05 | 3 vehicles | 2 routes",
        "[   5] #005B95  Fulton - 2 vehicles",
        "[   N] #cccccc  Judah - 1 vehicle",
    ]


def test_format_summary_before_first_update() -> None:
    assert format_summary(FeedSummary()) == "Not updated yet | 0 vehicles | 0 routes"


def test_legend() -> None:
    assert [text for _, text in LEGEND] == ["Empty", "Few Riders", "Several", "Many Riders"]
    assert format_legend().splitlines()[0] == "OCCUPANCY"
    assert "lightcoral" in format_legend()


def test_text_presenter_writes_summary() -> None:
    stream = io.StringIO()
    TextPresenter(stream, tz=UTC).render(_summary())

    assert stream.getvalue().startswith("Updated 12:30:05 | 3 vehicles")
