"""
Tests for public statistics and repair-cost estimates
"""
from datetime import datetime, timedelta, timezone

from civic_reports.models.report import ReportStatus
from civic_reports.schemas import PublicReport
from civic_reports.services.stats_service import (
    NO_NEIGHBORHOOD,
    categorize_damage,
    compute_statistics,
    estimate_repair_costs,
)

NOW = datetime(2026, 3, 15, 12, 0, tzinfo=timezone.utc)
_ids = iter(range(1, 10_000))


def make_report(
    title="Tjetër",
    status=ReportStatus.NEW,
    neighborhood=None,
    created_at=None,
    updated_at=None,
    photo_url=None,
) -> PublicReport:
    created_at = created_at or NOW - timedelta(hours=1)
    report_id = next(_ids)
    return PublicReport(
        id=report_id,
        tracking_code=f"CODE{report_id:04d}",
        title=title,
        description="Përshkrim",
        photo_url=photo_url,
        has_location=neighborhood is not None,
        latitude=41.11 if neighborhood else None,
        longitude=20.08 if neighborhood else None,
        neighborhood=neighborhood,
        status=status,
        admin_note=None,
        created_at=created_at,
        updated_at=updated_at or created_at,
    )


def test_empty_statistics():
    stats = compute_statistics([], now=NOW)
    assert stats.total == 0
    assert stats.resolution_rate == 0
    assert stats.avg_resolution_hours == 0
    assert stats.by_neighborhood == []
    assert len(stats.daily) == 14
    assert all(day.count == 0 for day in stats.daily)
    assert stats.avg_rating is None


def test_counts_and_resolution():
    reports = [
        make_report(status=ReportStatus.NEW, photo_url="/uploads/a.jpg"),
        make_report(status=ReportStatus.IN_PROGRESS, neighborhood="Lagja Kala"),
        make_report(
            status=ReportStatus.RESOLVED,
            created_at=NOW - timedelta(hours=30),
            updated_at=NOW - timedelta(hours=20),
        ),
    ]
    stats = compute_statistics(reports, now=NOW)

    assert (stats.total, stats.new, stats.in_progress, stats.resolved) == (3, 1, 1, 1)
    assert stats.with_location == 1
    assert stats.with_photo == 1
    assert stats.resolution_rate == 33
    assert stats.avg_resolution_hours == 10


def test_resolution_hours_are_whole_hours_per_report():
    reports = [
        make_report(status=ReportStatus.RESOLVED, created_at=NOW - timedelta(hours=3, minutes=50), updated_at=NOW),
        make_report(status=ReportStatus.RESOLVED, created_at=NOW - timedelta(hours=2, minutes=50), updated_at=NOW),
    ]
    # 3 and 2 whole hours, averaged and rounded half to even
    assert compute_statistics(reports, now=NOW).avg_resolution_hours == 2


def test_naive_datetimes_are_utc():
    naive = NOW.replace(tzinfo=None)
    report = make_report(created_at=naive - timedelta(days=1))
    stats = compute_statistics([report], now=NOW)
    assert stats.daily[-2].count == 1
    assert stats.daily[-2].date == "2026-03-14"


def test_neighborhood_ranking():
    reports = (
        [make_report(neighborhood="Lagja Kala")] * 3
        + [make_report(neighborhood="Lagja Partizani")] * 2
        + [make_report()] * 2
    )
    stats = compute_statistics(reports, now=NOW)
    assert [(n.name, n.value) for n in stats.by_neighborhood] == [
        ("Lagja Kala", 3),
        ("Lagja Partizani", 2),
        (NO_NEIGHBORHOOD, 2),
    ]


def test_neighborhood_top_eight_and_label():
    reports = [make_report(neighborhood=f"Lagja {i}") for i in range(10)] + [make_report()]
    stats = compute_statistics(reports, now=NOW, no_neighborhood_label="No neighborhood")
    assert len(stats.by_neighborhood) == 8
    assert stats.by_neighborhood[0].name == "Lagja 0"
    assert "No neighborhood" not in [n.name for n in stats.by_neighborhood]


def test_daily_window():
    reports = [
        make_report(created_at=NOW),
        make_report(created_at=NOW - timedelta(days=13)),
        make_report(created_at=NOW - timedelta(days=14)),
    ]
    stats = compute_statistics(reports, now=NOW)
    assert stats.daily[0].date == "2026-03-02"
    assert stats.daily[-1].date == "2026-03-15"
    assert stats.daily[0].count == 1
    assert stats.daily[-1].count == 1
    assert sum(day.count for day in stats.daily) == 2


def test_average_rating():
    assert compute_statistics([], ratings=[5, 4, 4], now=NOW).avg_rating == 4.3


# --- Repair costs ---

def test_categorize_damage_first_keyword_wins():
    assert categorize_damage("Ndriçim i prishur në rrugë") == "Ndriçim"
    assert categorize_damage("rrugë e dëmtuar") == "Rrugë"
    assert categorize_damage("MBETURINA") == "Mbeturina"
    assert categorize_damage("Qen i humbur") == "Tjetër"


def test_estimate_skips_resolved_reports():
    reports = [
        make_report(title="Ndriçim"),
        make_report(title="Ndriçim"),
        make_report(title="Rrugë"),
        make_report(title="Rrugë", status=ReportStatus.RESOLVED),
        make_report(title="Pemë e rrëzuar", status=ReportStatus.IN_PROGRESS),
    ]
    costs = estimate_repair_costs(reports)

    assert costs.by_category["Ndriçim"].count == 2
    assert costs.by_category["Ndriçim"].min == 10000
    assert costs.by_category["Rrugë"].count == 1
    assert costs.by_category["Tjetër"].max == 50000
    assert costs.total_min == 10000 + 50000 + 5000
    assert costs.total_max == 50000 + 500000 + 50000


def test_estimate_empty():
    costs = estimate_repair_costs([])
    assert (costs.total_min, costs.total_max, costs.by_category) == (0, 0, {})
