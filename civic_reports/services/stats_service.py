"""
Statistics over public reports and repair-cost estimates for open ones
"""
from collections import Counter
from datetime import datetime, timedelta, timezone
from typing import Dict, Iterable, Optional, Sequence

from civic_reports.models.report import ReportStatus
from civic_reports.schemas import (
    CostCategory,
    CostEstimateResponse,
    DailyCount,
    NeighborhoodCount,
    PublicReport,
    StatisticsResponse,
)

NO_NEIGHBORHOOD = "Pa lagje"
TOP_NEIGHBORHOODS = 8
DAILY_WINDOW_DAYS = 14

# Estimated repair cost in ALL per report, matched by keyword in the title.
# Order matters: the first keyword found wins.
DAMAGE_COSTS: Dict[str, Dict[str, int]] = {
    "Ndriçim": {"min": 5000, "max": 25000},
    "Rrugë": {"min": 50000, "max": 500000},
    "Mbeturina": {"min": 2000, "max": 10000},
    "Gjelbërim": {"min": 3000, "max": 20000},
    "Infrastrukturë": {"min": 20000, "max": 200000},
    "Tjetër": {"min": 5000, "max": 50000},
}
FALLBACK_CATEGORY = "Tjetër"


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes, stored as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _whole_hours(start: datetime, end: datetime) -> int:
    return int((_as_utc(end) - _as_utc(start)).total_seconds() / 3600)


def compute_statistics(
    reports: Sequence[PublicReport],
    ratings: Iterable[int] = (),
    now: Optional[datetime] = None,
    no_neighborhood_label: str = NO_NEIGHBORHOOD,
) -> StatisticsResponse:
    """Aggregate counts, resolution figures, neighborhoods and a daily series"""
    now = _as_utc(now or datetime.now(timezone.utc))
    total = len(reports)

    status_counts = Counter(r.status for r in reports)
    resolved_reports = [r for r in reports if r.status == ReportStatus.RESOLVED]
    resolved = len(resolved_reports)

    resolution_rate = round(resolved / total * 100) if total else 0
    avg_resolution_hours = (
        round(sum(_whole_hours(r.created_at, r.updated_at) for r in resolved_reports) / resolved)
        if resolved else 0
    )

    neighborhood_counts = Counter(r.neighborhood or no_neighborhood_label for r in reports)
    # Stable sort keeps first-seen order among equal counts
    by_neighborhood = [
        NeighborhoodCount(name=name, value=value)
        for name, value in sorted(neighborhood_counts.items(), key=lambda item: -item[1])[:TOP_NEIGHBORHOODS]
    ]

    created_days = Counter(_as_utc(r.created_at).date() for r in reports)
    today = now.date()
    daily = []
    for offset in range(DAILY_WINDOW_DAYS - 1, -1, -1):
        day = today - timedelta(days=offset)
        daily.append(DailyCount(date=day.isoformat(), count=created_days.get(day, 0)))

    ratings = list(ratings)
    avg_rating = round(sum(ratings) / len(ratings), 1) if ratings else None

    return StatisticsResponse(
        total=total,
        new=status_counts.get(ReportStatus.NEW, 0),
        in_progress=status_counts.get(ReportStatus.IN_PROGRESS, 0),
        resolved=resolved,
        with_location=sum(1 for r in reports if r.has_location),
        with_photo=sum(1 for r in reports if r.photo_url),
        resolution_rate=resolution_rate,
        avg_resolution_hours=avg_resolution_hours,
        by_neighborhood=by_neighborhood,
        daily=daily,
        avg_rating=avg_rating,
    )


def categorize_damage(title: str) -> str:
    lowered = (title or "").lower()
    for category in DAMAGE_COSTS:
        if category.lower() in lowered:
            return category
    return FALLBACK_CATEGORY


def estimate_repair_costs(reports: Sequence[PublicReport]) -> CostEstimateResponse:
    """Sum the min/max repair cost of every unresolved report"""
    total_min = total_max = 0
    by_category: Dict[str, CostCategory] = {}

    for report in reports:
        if report.status == ReportStatus.RESOLVED:
            continue
        category = categorize_damage(report.title)
        costs = DAMAGE_COSTS[category]
        total_min += costs["min"]
        total_max += costs["max"]

        bucket = by_category.setdefault(category, CostCategory())
        bucket.count += 1
        bucket.min += costs["min"]
        bucket.max += costs["max"]

    return CostEstimateResponse(total_min=total_min, total_max=total_max, by_category=by_category)
