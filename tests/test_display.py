# tests/test_display.py
from datetime import date

import pytest

from outdoorspot.models import LocationRecord
from outdoorspot.utils.display import (
    build_stats,
    compose_address,
    extract_amenities,
    extract_contact_info,
    extract_image_urls,
    format_currency,
    format_date,
    format_label,
    format_season,
    parse_structured_value,
)


def test_parse_structured_value():
    assert parse_structured_value("  ") is None
    assert parse_structured_value(" text ") == "text"
    assert parse_structured_value('{"a": 1}') == {"a": 1}
    assert parse_structured_value("[1, 2]") == [1, 2]
    assert parse_structured_value("{broken") == "{broken"
    assert parse_structured_value(5) == 5


@pytest.mark.parametrize("raw, expected", [
    ("costPerNight", "Cost Per Night"),
    ("pet_friendly", "Pet friendly"),
    ("picnic-area", "Picnic area"),
    ("  wifi ", "Wifi"),
])
def test_format_label(raw, expected):
    assert format_label(raw) == expected


def test_extract_image_urls_is_recursive_and_unique():
    images = [
        "https://img/1.jpg",
        {"url": "https://img/2.jpg", "thumb": "https://img/2s.jpg"},
        '["https://img/1.jpg", "https://img/3.jpg"]',
        None,
        "",
    ]
    assert extract_image_urls(images) == [
        "https://img/1.jpg",
        "https://img/2.jpg",
        "https://img/2s.jpg",
        "https://img/3.jpg",
    ]
    assert extract_image_urls(None) == []


def test_extract_amenities():
    assert extract_amenities({"wifi": True, "showers": False, "extra": ["picnic_tables"]}) == [
        "Wifi",
        "Picnic tables",
    ]
    assert extract_amenities('["Restrooms", "restrooms"]') == ["Restrooms"]
    assert extract_amenities(None) == []


def test_extract_contact_info():
    assert extract_contact_info({"phone": "555-0100", "email": "", "fax": None}) == [
        {"label": "Phone", "value": "555-0100"},
    ]
    assert extract_contact_info(["555-0100", {"email": "a@b.c"}]) == [
        {"label": "Contact 1", "value": "555-0100"},
        {"label": "Email", "value": "a@b.c"},
    ]
    assert extract_contact_info("call the ranger") == [{"label": "Contact", "value": "call the ranger"}]
    assert extract_contact_info("") == []


def test_format_currency():
    assert format_currency(35) == "$35.00"
    assert format_currency("$1,250.5") == "$1,250.50"
    assert format_currency("free") is None
    assert format_currency(None) is None


def test_format_date_and_season():
    assert format_date("2024-03-05") == "Mar 5, 2024"
    assert format_date(date(2024, 3, 5), with_year=False) == "Mar 5"
    assert format_date("not a date") is None
    assert format_season("2024-04-01", "2024-10-31") == "Apr 1 - Oct 31"
    assert format_season(None, "2024-10-31") == "? - Oct 31"
    assert format_season(None, None) is None


def test_address_and_stats():
    record = LocationRecord(
        id="loc-1", name="Camp", latitude=32.5, longitude=-96.25,
        address=" 1 Park Rd ", city="Cedar Hill", state="Texas",
        cost_per_night=20, difficulty_level=2, verified=False,
    )

    assert compose_address(record) == "1 Park Rd, Cedar Hill, Texas, US"

    stats = {stat["label"]: stat["value"] for stat in build_stats(record)}
    assert stats["Cost per Night"] == "$20.00"
    assert stats["Latitude"] == "32.50000"
    assert stats["Difficulty Level"] == "2/5"
    assert stats["Verified Status"] == "Not Verified"
    assert stats["Season"] is None
