from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .constants import FULL_TIME
from .storage import Store
from .validation import validate_timings


@dataclass
class Settings:
    """Library opening hours for each plan, as zero-padded 24h "HH:MM" strings."""

    full_time_start: str = "09:00"
    full_time_end: str = "21:00"
    half_time_start: str = "09:00"
    half_time_end: str = "14:00"

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "Settings":
        defaults = Settings()
        return Settings(
            full_time_start=str(d.get("fullTimeStart") or defaults.full_time_start),
            full_time_end=str(d.get("fullTimeEnd") or defaults.full_time_end),
            half_time_start=str(d.get("halfTimeStart") or defaults.half_time_start),
            half_time_end=str(d.get("halfTimeEnd") or defaults.half_time_end),
        )

    def to_dict(self) -> dict[str, str]:
        return {
            "fullTimeStart": self.full_time_start,
            "fullTimeEnd": self.full_time_end,
            "halfTimeStart": self.half_time_start,
            "halfTimeEnd": self.half_time_end,
        }

    def plan_hours(self, plan_type: str) -> str:
        if plan_type == FULL_TIME:
            return f"{self.full_time_start} - {self.full_time_end}"
        return f"{self.half_time_start} - {self.half_time_end}"


class SettingsStore:
    def __init__(self, store: Store, name: str = "timings"):
        self.store = store
        self.name = name

    def load(self) -> Settings:
        data = self.store.get(self.name)
        return Settings.from_dict(data if isinstance(data, dict) else {})

    def save(self, settings: Settings) -> dict[str, str]:
        """Persist `settings`; returns validation errors instead of saving bad ranges."""
        errors = validate_timings(settings.to_dict())
        if errors:
            return errors
        if not self.store.set(self.name, settings.to_dict()):
            return {"settings": "Failed to save settings"}
        return {}


def convert_to_12_hour(time24: str) -> str:
    if not time24:
        return ""
    hours, minutes = time24.split(":")
    hour = int(hours)
    ampm = "PM" if hour >= 12 else "AM"
    hour12 = 12 if hour == 0 else hour - 12 if hour > 12 else hour
    return f"{hour12}:{minutes} {ampm}"


def convert_to_24_hour(time12: str) -> str:
    if not time12:
        return ""
    time, period = time12.split(" ")
    hours, minutes = time.split(":")
    hour = int(hours)
    if period == "PM" and hour != 12:
        hour += 12
    elif period == "AM" and hour == 12:
        hour = 0
    return f"{hour:02d}:{minutes}"


def display_timing(student: Any, settings: Settings) -> str:
    if student.use_custom_timing and student.custom_start_time and student.custom_end_time:
        return f"{convert_to_12_hour(student.custom_start_time)} - {convert_to_12_hour(student.custom_end_time)} (Custom)"
    if student.plan_type == FULL_TIME:
        return f"{convert_to_12_hour(settings.full_time_start)} - {convert_to_12_hour(settings.full_time_end)}"
    return f"{convert_to_12_hour(settings.half_time_start)} - {convert_to_12_hour(settings.half_time_end)}"
