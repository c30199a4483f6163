from datetime import date, datetime

from freezegun import freeze_time

from visitlogger.services import analytics_service


def test_page_offset():
    assert analytics_service.page_offset(1, 10) == 0
    assert analytics_service.page_offset(2, 10) == 10
    assert analytics_service.page_offset(3, 25) == 50


def test_window_start_is_start_of_first_day():
    today = date(2024, 3, 2)

    assert analytics_service.window_start(1, today) == datetime(2024, 3, 2)
    assert analytics_service.window_start(3, today) == datetime(2024, 2, 29)


def test_window_dates_oldest_first():
    dates = analytics_service.window_dates(3, date(2024, 1, 1))

    assert dates == [date(2023, 12, 30), date(2023, 12, 31), date(2024, 1, 1)]


def test_daily_series_zero_fills_gaps():
    timestamps = [
        "2024-03-05T10:00:00.000Z",
        "2024-03-05T23:59:59.000Z",
        "2024-03-03T00:00:01.000Z",
    ]

    series = analytics_service.build_daily_series(timestamps, 4, date(2024, 3, 5))

    assert series == [
        {"date": "2024-03-02", "count": 0},
        {"date": "2024-03-03", "count": 1},
        {"date": "2024-03-04", "count": 0},
        {"date": "2024-03-05", "count": 2},
    ]


def test_daily_series_uses_utc_date_of_offset_timestamps():
    # 22:30 en UTC-3 es el día siguiente en UTC
    series = analytics_service.build_daily_series(["2024-03-04T22:30:00-03:00"], 2, date(2024, 3, 5))

    assert series == [
        {"date": "2024-03-04", "count": 0},
        {"date": "2024-03-05", "count": 1},
    ]


def test_daily_series_ignores_out_of_window_and_invalid_timestamps():
    timestamps = ["2023-01-01T00:00:00Z", "not-a-date", None, "2024-03-05T12:00:00Z"]

    series = analytics_service.build_daily_series(timestamps, 1, date(2024, 3, 5))

    assert series == [{"date": "2024-03-05", "count": 1}]


def test_daily_series_length_matches_days_when_empty():
    series = analytics_service.build_daily_series([], 30, date(2024, 3, 5))

    assert len(series) == 30
    assert all(point["count"] == 0 for point in series)
    assert series[0]["date"] == "2024-02-05"


@freeze_time("2024-03-05 15:00:00")
def test_visits_graph_filters_by_created_at_window(store):
    base = {
        "scriptId": "script-1",
        "userId": "owner-1",
        "ipAddress": "blog.example.com",
        "userAgent": "Mozilla/5.0",
    }
    store.create_document("events", dict(base, timestamp="2024-03-05T09:00:00Z"))
    store.create_document("events", dict(base, timestamp="2024-03-04T09:00:00Z"))
    store.create_document("events", dict(base, timestamp="2024-03-04T10:00:00Z"))

    graph = analytics_service.visits_graph(store, "events", "script-1", days=3)

    assert graph == [
        {"date": "2024-03-03", "count": 0},
        {"date": "2024-03-04", "count": 2},
        {"date": "2024-03-05", "count": 1},
    ]


@freeze_time("2024-03-05 15:00:00")
def test_list_visits_paginates(store):
    for i in range(3):
        store.create_document(
            "events",
            {
                "scriptId": "script-1",
                "userId": "owner-1",
                "ipAddress": "blog.example.com",
                "timestamp": "2024-03-05T09:00:00Z",
                "userAgent": f"agent-{i}",
            },
        )

    result = analytics_service.list_visits(store, "events", "script-1", page=2, limit=2)

    assert result.total == 3
    assert [doc["userAgent"] for doc in result.documents] == ["agent-0"]
