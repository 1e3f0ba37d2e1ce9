"""Aggregation helpers exercised on plain objects."""
from datetime import date, datetime
from types import SimpleNamespace

from kam_admin.schemas.performance import PerformanceTableFilter
from kam_admin.services import analytics


def record(user_id, name, poc, ach, potential=100.0):
    return SimpleNamespace(
        user_id=user_id, date="15/01/2024", name=name, poc=poc,
        potential=potential, last_30_days=ach, pro_rated_ach=ach, short_fall=0.0,
    )


def call(user_id, status="call connected", tag=None, when=datetime(2024, 1, 15, 10, 0)):
    return SimpleNamespace(user_id=user_id, status=status, complaint_tag=tag, timestamp=when)


def query(user_id, tag, status="open", when=datetime(2024, 1, 16, 9, 30)):
    return SimpleNamespace(user_id=user_id, complaint_tag=tag, status=status, timestamp=when)


def tag(user_id, *retailers):
    return SimpleNamespace(user_id=user_id, retailers=list(retailers))


RECORDS = [
    record("U1", "Ravi Kumar", "Priya", 50.0),
    record("U2", "Meena Shah", "Priya", 90.0),
    record("U3", "Arjun Das", "Karan", 0.0),
    record("U4", "Neha Iyer", "Karan", 25.0),
]


def test_dashboard_summary_counts():
    calls = [call("U1"), call("U2", status="switched off"), call("U3")]
    queries = [query("U3", "Tracking Issue"), query("U4", "Payment Related", status="resolved")]
    tags = [tag("U1", "Myntra")]

    summary = analytics.dashboard_summary(RECORDS, calls, queries, tags, threshold=50.0)

    assert summary.active_accounts == 4
    assert summary.underperforming == 2
    assert summary.calls_completed == 3
    assert summary.connected_calls == 2
    assert summary.success_rate == 66.7
    assert summary.untagged_users == 3
    assert summary.new_queries == 1
    assert [r.user_id for r in summary.lowest_performers] == ["U3", "U4"]


def test_dashboard_summary_without_calls():
    summary = analytics.dashboard_summary([], [], [], [], threshold=50.0)

    assert summary.success_rate == 0.0
    assert summary.lowest_performers == []


def test_exactly_threshold_is_not_underperforming():
    assert not analytics.is_underperforming(RECORDS[0], 50.0)
    assert analytics.is_underperforming(RECORDS[3], 50.0)


def test_filter_by_search_is_case_insensitive():
    rows = analytics.filter_performance_table(RECORDS, PerformanceTableFilter(search="meena"), 50.0)

    assert [r.user_id for r in rows] == ["U2"]


def test_filter_by_poc_and_performance():
    filters = PerformanceTableFilter(poc="Karan", performance="underperforming")

    rows = analytics.filter_performance_table(RECORDS, filters, 50.0)

    assert {r.user_id for r in rows} == {"U3", "U4"}

    good = analytics.filter_performance_table(RECORDS, PerformanceTableFilter(performance="good"), 50.0)
    assert {r.user_id for r in good} == {"U1", "U2"}


def test_sort_by_name_descending():
    filters = PerformanceTableFilter(sort_field="name", sort_direction="desc")

    rows = analytics.filter_performance_table(RECORDS, filters, 50.0)

    assert [r.name for r in rows] == ["Ravi Kumar", "Neha Iyer", "Meena Shah", "Arjun Das"]


def test_default_sort_is_ascending_pro_rated_ach():
    rows = analytics.filter_performance_table(RECORDS, PerformanceTableFilter(), 50.0)

    assert [r.pro_rated_ach for r in rows] == [0.0, 25.0, 50.0, 90.0]


def test_performance_table_stats():
    stats = analytics.performance_table_stats(RECORDS[:2], 50.0)

    assert stats.total == 2
    assert stats.underperforming == 0
    assert stats.avg_pro_rated_ach == 70.0

    empty = analytics.performance_table_stats([], 50.0)
    assert empty.avg_pro_rated_ach == 0.0


def test_distinct_pocs_sorted():
    assert analytics.distinct_pocs(RECORDS) == ["Karan", "Priya"]


def test_complaint_tag_counts_merge_calls_and_queries():
    calls = [call("U1", tag="Tracking Issue"), call("U2"), call("U3", tag="  ")]
    queries = [query("U3", "Tracking Issue"), query("U4", "Product Issue")]

    counts = analytics.complaint_tag_counts(calls, queries)

    assert [(c.tag, c.count) for c in counts] == [("Tracking Issue", 2), ("Product Issue", 1)]


def test_retailer_counts_and_performance():
    tags = [tag("U1", "Myntra", "Nykaa"), tag("U2", "Myntra"), tag("U9", "Ajio")]

    counts = analytics.retailer_counts(tags)
    performance = analytics.retailer_performance(tags, RECORDS)

    assert [(c.retailer, c.count) for c in counts] == [("Myntra", 2), ("Nykaa", 1), ("Ajio", 1)]
    # U9 has no performance record
    assert [(p.retailer, p.avg_performance, p.users) for p in performance] == [
        ("Myntra", 70.0, 2),
        ("Nykaa", 50.0, 1),
    ]


def test_timeline_counts_tagged_calls_and_all_queries():
    calls = [
        call("U1", tag="Tracking Issue", when=datetime(2024, 1, 15, 8)),
        call("U2", when=datetime(2024, 1, 15, 9)),
    ]
    queries = [
        query("U3", "Product Issue", when=datetime(2024, 1, 15, 18)),
        query("U4", "Other", when=datetime(2024, 1, 17, 11)),
    ]

    timeline = analytics.complaint_timeline(calls, queries)

    assert [(p.date, p.count) for p in timeline] == [(date(2024, 1, 15), 2), (date(2024, 1, 17), 1)]


def test_affected_users_by_selected_tag():
    calls = [call("U1", tag="Tracking Issue"), call("U2", tag="Product Issue")]
    queries = [query("U1", "Payment Related"), query("U3", "Tracking Issue")]

    users = analytics.affected_users(RECORDS, calls, queries, selected=["Tracking Issue"])

    assert [u.record.user_id for u in users] == ["U1", "U3"]
    assert users[0].sources == ["Calls"]
    assert users[1].sources == ["Queries"]
    assert users[1].complaints == ["Tracking Issue"]


def test_affected_users_without_selection_and_with_search():
    calls = [call("U2")]
    queries = [query("U4", "Other")]

    everyone = analytics.affected_users(RECORDS, calls, queries)
    searched = analytics.affected_users(RECORDS, calls, queries, search="neha")

    assert [u.record.user_id for u in everyone] == ["U2", "U4"]
    assert everyone[0].sources == []
    assert [u.record.user_id for u in searched] == ["U4"]


def test_query_stats():
    queries = [query("U1", "a"), query("U2", "b", status="in-progress"), query("U3", "c", status="resolved"),
               query("U4", "d")]

    stats = analytics.query_stats(queries)

    assert (stats.total, stats.open, stats.in_progress, stats.resolved) == (4, 2, 1, 1)


def test_tagging_stats():
    stats = analytics.tagging_stats(RECORDS, [tag("U1", "Myntra"), tag("U2", "Myntra", "Ajio")])

    assert stats.total_users == 4
    assert stats.tagged_users == 2
    assert stats.untagged_users == 2
    assert stats.top_retailer.retailer == "Myntra"
    assert analytics.tagging_stats([], []).top_retailer is None


def test_tagging_stats_ignore_tags_without_a_current_record():
    tags = [tag("U1", "Myntra"), tag("OLD1", "Ajio"), tag("OLD2", "Ajio"), tag("OLD3", "Rio"), tag("OLD4", "Rio")]

    stats = analytics.tagging_stats(RECORDS[:2], tags)
    summary = analytics.dashboard_summary(RECORDS[:2], [], [], tags, threshold=50.0)

    assert stats.tagged_users == 1
    assert stats.untagged_users == 1
    assert stats.untagged_users == summary.untagged_users
