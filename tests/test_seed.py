# tests/test_seed.py
import json
from datetime import date

import pytest
from unittest.mock import AsyncMock, MagicMock

from outdoorspot.db.seed import (
    as_date,
    as_number,
    fill_empty,
    is_seedable,
    main,
    normalize_record,
    round_coord,
    seed_lines,
)
from outdoorspot.errors import NotFoundError
from test_utils import print_test_name, print_test_result

RECORD = {
    "name": "  Lake Texoma  ",
    "latitude": 33.81794,
    "longitude": -96.57031,
    "state": " Texas ",
    "costPerNight": "25.5",
    "seasonStart": "2024-04-01T00:00:00Z",
    "websiteUrl": "",
    "images": ["https://img/texoma.jpg"],
}


def test_helpers():
    assert as_number(" 12.5 ") == 12.5
    assert as_number("n/a") is None
    assert as_number(True) is None
    assert as_number("nan") is None
    assert as_date("2024-04-01") == date(2024, 4, 1)
    assert as_date("April") is None
    assert round_coord(33.81794) == 33.818
    assert round_coord("33.8") is None


@pytest.mark.parametrize("record, expected", [
    ({"name": "A", "latitude": 1, "longitude": 2.5}, True),
    ({"name": " ", "latitude": 1, "longitude": 2}, False),
    ({"name": "A", "latitude": "1", "longitude": 2}, False),
    ({"name": "A", "latitude": 1}, False),
    ({"name": "A", "latitude": True, "longitude": 2}, False),
])
def test_is_seedable(record, expected):
    assert is_seedable(record) is expected


def test_normalize_record_defaults():
    values = normalize_record(RECORD)

    assert values["name"] == "Lake Texoma"
    assert values["state"] == "Texas"
    assert values["country"] == "US"
    assert values["location_type"] == "Facility"
    assert values["cost_per_night"] == 25.5
    assert values["season_start"] == date(2024, 4, 1)
    assert values["website_url"] is None
    assert values["verified"] is True
    assert values["is_active"] is True
    assert values["pet_friendly"] is False
    assert values["images"] == ["https://img/texoma.jpg"]
    assert "amenities" not in values


def test_fill_empty_never_overwrites():
    existing = {"id": "loc-1", "name": "Lake Texoma", "description": "", "city": None, "state": "TX"}
    incoming = {"name": "Other", "description": "Reservoir", "city": None, "state": "Texas"}
    assert fill_empty(existing, incoming) == {"description": "Reservoir"}


def make_repo(existing=None):
    repo = MagicMock()
    repo.find_existing = AsyncMock(return_value=existing)
    repo.insert_values = AsyncMock()
    repo.update = AsyncMock()
    return repo


@pytest.mark.asyncio
class TestSeedLines:

    async def test_new_record_is_inserted(self):
        test_name = "test_new_record_is_inserted"
        print_test_name(test_name)
        try:
            # --- Arrange ---
            repo = make_repo()

            # --- Act ---
            summary = await seed_lines(repo, [json.dumps(RECORD)])

            # --- Assert ---
            assert (summary.read, summary.created, summary.updated) == (1, 1, 0)
            name, lat, lng = repo.find_existing.await_args.args
            assert (name, lat, lng) == ("Lake Texoma", 33.818, -96.57)
            repo.insert_values.assert_awaited_once()
            print_test_result(test_name, passed=True)
        except Exception as e:
            print_test_result(test_name, passed=False)
            raise e

    async def test_existing_record_only_gets_empty_columns(self):
        repo = make_repo(existing={"id": "loc-7", "name": "Lake Texoma", "state": "TX", "city": None})
        record = {**RECORD, "city": "Denison"}

        summary = await seed_lines(repo, [json.dumps(record)])

        assert summary.updated == 1
        location_id, values = repo.update.await_args.args
        assert location_id == "loc-7"
        assert values["city"] == "Denison"
        assert "state" not in values
        assert "name" not in values
        repo.insert_values.assert_not_awaited()

    async def test_bad_lines_are_counted(self):
        repo = make_repo()
        repo.insert_values = AsyncMock(side_effect=[NotFoundError("boom"), None])
        lines = [
            "",
            "{not json",
            json.dumps({"name": "No coords"}),
            json.dumps(RECORD),
            json.dumps({**RECORD, "name": "Second"}),
            "   ",
        ]

        summary = await seed_lines(repo, lines)

        assert summary.read == 4
        assert summary.skipped == 1
        assert summary.errors == 2
        assert summary.created == 1


def test_main_missing_file(tmp_path):
    assert main([str(tmp_path / "missing.jsonl")]) == 1
