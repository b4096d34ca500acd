"""Helpers turning loosely structured location data into display values.

Location rows carry free-form JSON (`images`, `amenities`, `contactInfo`)
coming from several scrapers, so values may be strings holding JSON,
nested lists or dicts. These helpers normalize them.
"""
import json
import re
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Union

_CAMEL_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")
_SEPARATORS = re.compile(r"[_\-]+")
_SPACES = re.compile(r"\s+")
_NON_NUMERIC = re.compile(r"[^0-9.\-]+")


def parse_structured_value(value: Any) -> Any:
    """Trim strings and decode the ones that look like JSON objects or arrays.

    Returns None for None and for blank strings.
    """
    if isinstance(value, str):
        trimmed = value.strip()
        if not trimmed:
            return None
        looks_like_json = (
            (trimmed.startswith("{") and trimmed.endswith("}"))
            or (trimmed.startswith("[") and trimmed.endswith("]"))
        )
        if looks_like_json:
            try:
                return json.loads(trimmed)
            except ValueError:
                return trimmed
        return trimmed
    return value


def format_label(label: str) -> str:
    """`costPerNight` -> `Cost Per Night`, `pet_friendly` -> `Pet friendly`."""
    text = _CAMEL_BOUNDARY.sub(r"\1 \2", label)
    text = _SEPARATORS.sub(" ", text)
    text = _SPACES.sub(" ", text).strip()
    return text[:1].upper() + text[1:]


def extract_image_urls(value: Any) -> List[str]:
    """Collect image URLs from any nesting of strings, lists and dicts."""
    urls: Dict[str, None] = {}

    def visit(item: Any) -> None:
        parsed = parse_structured_value(item)
        if not parsed:
            return
        if isinstance(parsed, str):
            urls[parsed] = None
        elif isinstance(parsed, list):
            for entry in parsed:
                visit(entry)
        elif isinstance(parsed, dict):
            possible_url = parsed.get("url")
            if isinstance(possible_url, str) and possible_url.strip():
                urls[possible_url.strip()] = None
            for entry in parsed.values():
                visit(entry)

    visit(value)
    return [url for url in urls if url]


def extract_amenities(value: Any) -> List[str]:
    """Flatten amenities into labels. `{"wifi": true}` gives `Wifi`."""
    items: Dict[str, None] = {}

    def visit(item: Any, label_hint: Optional[str] = None) -> None:
        parsed = parse_structured_value(item)
        if parsed is None:
            return
        if isinstance(parsed, bool):
            if parsed and label_hint:
                items[format_label(label_hint)] = None
        elif isinstance(parsed, (str, int, float)):
            items[format_label(str(parsed))] = None
        elif isinstance(parsed, list):
            for entry in parsed:
                visit(entry)
        elif isinstance(parsed, dict):
            for key, entry in parsed.items():
                visit(entry, key)

    visit(value)
    return list(items)


def _present(value: Any) -> bool:
    return value is not None and str(value).strip() != ""


def extract_contact_info(value: Any) -> List[Dict[str, str]]:
    """Contact info as a list of `{label, value}` entries."""
    parsed = parse_structured_value(value)
    if not parsed:
        return []

    if isinstance(parsed, list):
        entries: List[Dict[str, str]] = []
        for index, entry in enumerate(parsed):
            structured = parse_structured_value(entry)
            if not structured:
                continue
            if isinstance(structured, (str, int, float)):
                entries.append({"label": f"Contact {index + 1}", "value": str(structured)})
            elif isinstance(structured, dict):
                entries.extend(
                    {"label": format_label(key), "value": str(val)}
                    for key, val in structured.items()
                    if _present(val)
                )
        return entries

    if isinstance(parsed, dict):
        return [
            {"label": format_label(key), "value": str(val)}
            for key, val in parsed.items()
            if _present(val)
        ]

    return [{"label": "Contact", "value": str(parsed)}]


def format_currency(value: Any) -> Optional[str]:
    """USD formatting, e.g. `35` -> `$35.00`. Unparseable input gives None."""
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        numeric = float(value)
    elif isinstance(value, str):
        cleaned = _NON_NUMERIC.sub("", value.strip())
        try:
            numeric = float(cleaned)
        except ValueError:
            return None
    else:
        try:
            numeric = float(value)
        except (TypeError, ValueError):
            return None

    sign = "-" if numeric < 0 else ""
    return f"{sign}${abs(numeric):,.2f}"


def _as_date(value: Union[str, date, datetime, None]) -> Optional[date]:
    if value is None:
        return None
    if isinstance(value, (date, datetime)):
        return value
    text = str(value).strip()
    if not text:
        return None
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return None


def format_date(value: Union[str, date, datetime, None], with_year: bool = True) -> Optional[str]:
    """`2024-03-05` -> `Mar 5, 2024` (or `Mar 5` without the year)."""
    parsed = _as_date(value)
    if parsed is None:
        return None
    text = f"{parsed.strftime('%b')} {parsed.day}"
    return f"{text}, {parsed.year}" if with_year else text


def format_season(start: Any = None, end: Any = None) -> Optional[str]:
    start_text = format_date(start, with_year=False)
    end_text = format_date(end, with_year=False)
    if not start_text and not end_text:
        return None
    return f"{start_text or '?'} - {end_text or '?'}"


def compose_address(location: Any) -> Optional[str]:
    parts = [
        part.strip()
        for part in (location.address, location.city, location.state, location.country)
        if part and part.strip()
    ]
    return ", ".join(parts) if parts else None


def build_stats(location: Any) -> List[Dict[str, Optional[str]]]:
    """Label/value pairs for the detail view of a location record."""

    def suffixed(value: Any, suffix: str) -> Optional[str]:
        return f"{value}{suffix}" if value is not None else None

    return [
        {"label": "Cost per Night", "value": format_currency(location.cost_per_night)},
        {"label": "Season", "value": format_season(location.season_start, location.season_end)},
        {"label": "Terrain", "value": location.terrain_type},
        {"label": "Climate Zone", "value": location.climate_zone},
        {"label": "Latitude", "value": f"{location.latitude:.5f}"},
        {"label": "Longitude", "value": f"{location.longitude:.5f}"},
        {"label": "Elevation", "value": suffixed(location.elevation, " ft")},
        {"label": "Max Capacity", "value": suffixed(location.max_capacity, " people")},
        {"label": "Difficulty Level", "value": suffixed(location.difficulty_level, "/5")},
        {"label": "Safety Notes", "value": location.safety_notes},
        {"label": "Regulations", "value": location.regulations},
        {"label": "Verified Status", "value": "Verified" if location.verified else "Not Verified"},
        {"label": "Active", "value": "Active" if location.is_active else "Inactive"},
        {"label": "Created By", "value": location.created_by_id},
    ]
