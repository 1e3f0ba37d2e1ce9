# kam_admin/services/analytics.py
"""Aggregations behind the dashboard, performance table and analytics views.

Every function takes already-scoped collections (see services.access) and is
free of I/O. Inputs may be ORM rows or schema objects; only attributes are read.
"""
from collections import Counter, OrderedDict
from typing import Dict, Iterable, List, Optional, Sequence

from kam_admin.schemas.analytics import (
    AffectedUser,
    DashboardSummary,
    RetailerPerformance,
    TagCount,
    TimelinePoint,
)
from kam_admin.schemas.performance import (
    PerformanceRecordData,
    PerformanceTableFilter,
    PerformanceTableStats,
)
from kam_admin.schemas.query import QueryStatsResponse
from kam_admin.schemas.tag import RetailerCount, RetailerTaggingStats
from kam_admin.services.ingestion import round_half_away_from_zero

CONNECTED = "call connected"
LOWEST_PERFORMERS_LIMIT = 5


def _as_record(record) -> PerformanceRecordData:
    if isinstance(record, PerformanceRecordData):
        return record
    return PerformanceRecordData.model_validate(record)


def is_underperforming(record, threshold: float) -> bool:
    return record.pro_rated_ach < threshold


def matches_search(record, term: Optional[str]) -> bool:
    if not term:
        return True
    term = term.lower()
    return (
        term in str(record.user_id).lower()
        or term in record.name.lower()
        or term in record.poc.lower()
    )


def distinct_pocs(records: Iterable) -> List[str]:
    return sorted({r.poc for r in records})


def dashboard_summary(records: Sequence, calls: Sequence, queries: Sequence, tags: Sequence,
                      threshold: float) -> DashboardSummary:
    underperforming = [r for r in records if is_underperforming(r, threshold)]
    connected = sum(1 for c in calls if c.status == CONNECTED)
    success_rate = round(connected / len(calls) * 100, 1) if calls else 0.0
    tagged_ids = {t.user_id for t in tags}
    lowest = sorted(underperforming, key=lambda r: r.pro_rated_ach)[:LOWEST_PERFORMERS_LIMIT]

    return DashboardSummary(
        active_accounts=len(records),
        underperforming=len(underperforming),
        calls_completed=len(calls),
        connected_calls=connected,
        success_rate=success_rate,
        pending_reviews=len(underperforming),
        untagged_users=sum(1 for r in records if r.user_id not in tagged_ids),
        new_queries=sum(1 for q in queries if q.status == "open"),
        lowest_performers=[_as_record(r) for r in lowest],
    )


def filter_performance_table(records: Sequence, filters: PerformanceTableFilter,
                             threshold: float) -> List[PerformanceRecordData]:
    """Search, POC and performance filtering followed by a stable sort."""
    rows = []
    for record in records:
        if not matches_search(record, filters.search):
            continue
        if filters.poc and record.poc != filters.poc:
            continue
        if filters.performance == "underperforming" and not is_underperforming(record, threshold):
            continue
        if filters.performance == "good" and is_underperforming(record, threshold):
            continue
        rows.append(_as_record(record))

    field = filters.sort_field
    reverse = filters.sort_direction == "desc"

    def sort_key(record):
        value = getattr(record, field)
        if isinstance(value, (int, float)):
            return value
        return str(value).lower()

    return sorted(rows, key=sort_key, reverse=reverse)


def performance_table_stats(records: Sequence, threshold: float) -> PerformanceTableStats:
    total = len(records)
    average = sum(r.pro_rated_ach for r in records) / total if total else 0.0
    return PerformanceTableStats(
        total=total,
        underperforming=sum(1 for r in records if is_underperforming(r, threshold)),
        avg_pro_rated_ach=round(average, 1),
    )


def complaint_tag_counts(calls: Iterable, queries: Iterable) -> List[TagCount]:
    counts: Dict[str, int] = OrderedDict()
    for item in list(calls) + list(queries):
        tag = item.complaint_tag
        if tag and tag.strip():
            counts[tag] = counts.get(tag, 0) + 1
    ordered = sorted(counts.items(), key=lambda kv: kv[1], reverse=True)
    return [TagCount(tag=tag, count=count) for tag, count in ordered]


def retailer_counts(tags: Iterable) -> List[RetailerCount]:
    counts: Dict[str, int] = OrderedDict()
    for tag in tags:
        for retailer in tag.retailers:
            counts[retailer] = counts.get(retailer, 0) + 1
    ordered = sorted(counts.items(), key=lambda kv: kv[1], reverse=True)
    return [RetailerCount(retailer=name, count=count) for name, count in ordered]


def retailer_performance(tags: Iterable, records: Sequence) -> List[RetailerPerformance]:
    """Average ProRatedAch of the tagged users behind each retailer."""
    by_user = {}
    for record in records:
        # first record wins when a UserID appears more than once
        by_user.setdefault(record.user_id, record)

    totals: Dict[str, List[float]] = OrderedDict()
    for tag in tags:
        record = by_user.get(tag.user_id)
        if record is None:
            continue
        for retailer in tag.retailers:
            totals.setdefault(retailer, []).append(record.pro_rated_ach)

    rows = [
        RetailerPerformance(
            retailer=retailer,
            avg_performance=round_half_away_from_zero(sum(values) / len(values)),
            users=len(values),
        )
        for retailer, values in totals.items()
    ]
    return sorted(rows, key=lambda row: row.avg_performance, reverse=True)


def complaint_timeline(calls: Iterable, queries: Iterable) -> List[TimelinePoint]:
    """Daily counts of tagged calls plus all queries."""
    daily: Counter = Counter()
    for call in calls:
        if call.complaint_tag:
            daily[call.timestamp.date()] += 1
    for query in queries:
        daily[query.timestamp.date()] += 1
    return [TimelinePoint(date=day, count=count) for day, count in sorted(daily.items())]


def affected_users(records: Sequence, calls: Sequence, queries: Sequence,
                   selected: Optional[Sequence[str]] = None,
                   search: Optional[str] = None) -> List[AffectedUser]:
    """Records whose user has a call or query carrying one of ``selected``.

    With no selection every call and query counts.
    """
    selected = [s for s in (selected or []) if s]
    if selected:
        calls = [c for c in calls if c.complaint_tag and c.complaint_tag in selected]
        queries = [q for q in queries if q.complaint_tag in selected]

    call_tags: Dict[str, List[str]] = {}
    for call in calls:
        call_tags.setdefault(call.user_id, [])
        if call.complaint_tag:
            call_tags[call.user_id].append(call.complaint_tag)
    query_tags: Dict[str, List[str]] = {}
    for query in queries:
        query_tags.setdefault(query.user_id, []).append(query.complaint_tag)

    result = []
    for record in records:
        if record.user_id not in call_tags and record.user_id not in query_tags:
            continue
        if not matches_search(record, search):
            continue
        sources = []
        if call_tags.get(record.user_id):
            sources.append("Calls")
        if query_tags.get(record.user_id):
            sources.append("Queries")
        result.append(
            AffectedUser(
                record=_as_record(record),
                complaints=call_tags.get(record.user_id, []) + query_tags.get(record.user_id, []),
                sources=sources,
            )
        )
    return result


def query_stats(queries: Sequence) -> QueryStatsResponse:
    statuses = Counter(q.status for q in queries)
    return QueryStatsResponse(
        total=len(queries),
        open=statuses["open"],
        in_progress=statuses["in-progress"],
        resolved=statuses["resolved"],
    )


def tagging_stats(records: Sequence, tags: Sequence) -> RetailerTaggingStats:
    counts = retailer_counts(tags)
    # tags survive re-imports, so only count those matching a current record
    tagged_ids = {t.user_id for t in tags}
    untagged = sum(1 for r in records if r.user_id not in tagged_ids)
    return RetailerTaggingStats(
        total_users=len(records),
        tagged_users=len(records) - untagged,
        untagged_users=untagged,
        top_retailer=counts[0] if counts else None,
    )
