from datetime import date

from visitlogger.utils import as_text, parse_client_date


def test_as_text():
    assert as_text(12.5, "0") == "12.5"
    assert as_text("Mendoza", "Unknown") == "Mendoza"
    assert as_text(None, "Unknown") == "Unknown"
    assert as_text("", "Unknown") == "Unknown"
    assert as_text(0, "1") == "1"


def test_parse_client_date():
    assert parse_client_date("2024-03-01T23:30:00.000Z") == date(2024, 3, 1)
    assert parse_client_date("2024-03-01T22:30:00-03:00") == date(2024, 3, 2)
    assert parse_client_date("2024-03-01") == date(2024, 3, 1)
    assert parse_client_date("2024-03-01T10:00:00") == date(2024, 3, 1)


def test_parse_client_date_invalid():
    assert parse_client_date(None) is None
    assert parse_client_date("") is None
    assert parse_client_date("yesterday") is None
