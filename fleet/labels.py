"""Checklist catalog and label resolution for checklist keys."""

import re
from typing import Any, Dict, Iterable, List, Optional


class ChecklistField:
    """One checklist point, e.g. 'brake_lights' -> 'Brake lights'."""

    def __init__(self, key: str, label: str):
        self.key = key
        self.label = label


class ChecklistCategory:
    """A named group of checklist fields (exterior, interior, ...)."""

    def __init__(self, key: str, label: str, fields: Optional[List[ChecklistField]] = None):
        self.key = key
        self.label = label
        self.fields = fields or []


DEFAULT_CATEGORIES = [
    ChecklistCategory(
        "exterior",
        "Exterior Inspection",
        [
            ChecklistField("body_condition", "Body condition (scratches, dents, rust)"),
            ChecklistField("windshield", "Windshield and windows (cracks, chips)"),
            ChecklistField("mirrors", "Mirrors (side & rearview)"),
            ChecklistField("headlights", "Headlights / Tail lights / Indicators"),
            ChecklistField("brake_lights", "Brake lights"),
            ChecklistField("wipers", "Wipers and washer fluid"),
            ChecklistField("doors", "Doors, locks, and handles"),
            ChecklistField("tyres", "Tyres (tread depth, condition)"),
        ],
    ),
    ChecklistCategory(
        "interior",
        "Interior Inspection",
        [
            ChecklistField("battery", "Battery"),
            ChecklistField("seat_belts", "Seat belts condition"),
            ChecklistField("dashboard_warning", "Dashboard warning lights"),
            ChecklistField("speedometer", "Speedometer functioning"),
            ChecklistField("fuel_gauge", "Fuel gauge working"),
            ChecklistField("interior_lights", "Interior lights"),
            ChecklistField("handbrake", "Handbrake functioning"),
            ChecklistField("foot_brake", "Foot brake response"),
            ChecklistField("dry_cleaning", "Dry Cleaning"),
        ],
    ),
    ChecklistCategory(
        "road_test",
        "Road Test",
        [
            ChecklistField("ac_heater", "Air conditioning / Heater"),
            ChecklistField("engine_start", "Smooth engine start"),
            ChecklistField("steering", "Steering alignment"),
            ChecklistField("brake_performance", "Brake performance"),
            ChecklistField("suspension", "Suspension condition"),
            ChecklistField("unusual_noises", "Unusual noises"),
            ChecklistField("gear_shifting", "Gear shifting smooth"),
            ChecklistField("clutch", "Clutch"),
            ChecklistField("wheel_alignment", "Wheel alignment"),
            ChecklistField("horn", "Horn"),
            ChecklistField("music_system", "Music system"),
        ],
    ),
]

_PARENTHETICAL = re.compile(r" \(.*\)")


def format_key(key: str) -> str:
    """Render a raw checklist key readably: 'brake_lights' -> 'Brake Lights'."""
    return " ".join(word.capitalize() for word in key.split("_") if word)


class ChecklistCatalog:
    """Lookup of checklist keys to display labels."""

    def __init__(self, categories: Optional[Iterable[ChecklistCategory]] = None):
        self.categories = list(categories) if categories is not None else []
        self._labels: Dict[str, str] = {}
        for category in self.categories:
            for f in category.fields:
                # First definition wins if a key appears in several categories
                self._labels.setdefault(f.key, f.label)

    @classmethod
    def default(cls) -> "ChecklistCatalog":
        return cls(DEFAULT_CATEGORIES)

    def __contains__(self, key: str) -> bool:
        return key in self._labels

    def __len__(self) -> int:
        return len(self._labels)

    def resolve_label(self, key: str) -> str:
        """
        Display label for a checklist key.

        Configured labels lose any parenthetical detail ("Tyres (tread
        depth, condition)" -> "Tyres"). Unknown keys, such as legacy remark
        keys, fall back to format_key so they still read well.
        """
        label = self._labels.get(key)
        if label is None:
            return format_key(key)
        return _PARENTHETICAL.sub("", label, count=1)


def catalog_from_list(data: List[Dict[str, Any]]) -> ChecklistCatalog:
    """Build a catalog from the YAML 'checklist' list of categories."""
    categories = []
    for cat in data or []:
        fields = [ChecklistField(f["key"], f["label"]) for f in cat.get("fields") or []]
        categories.append(
            ChecklistCategory(cat["key"], cat.get("label") or format_key(cat["key"]), fields)
        )
    return ChecklistCatalog(categories)
