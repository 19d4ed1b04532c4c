"""Form validation.

Each validator returns a mapping of field name to message. An empty mapping
means the form is valid; callers must not mutate anything otherwise.
"""
from __future__ import annotations

import re
from typing import Any, Iterable

from .constants import FULL_TIME, HALF_TIME, PAYMENT_METHODS

EMAIL_RE = re.compile(r"\S+@\S+\.\S+")
STUDENT_PHONE_RE = re.compile(r"^\+91\s\d{10}$")
TIME_RE = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


def _text(form: dict[str, Any], key: str) -> str:
    value = form.get(key)
    return "" if value is None else str(value)


def _others(records: Iterable[Any], editing_id: int | None) -> list[Any]:
    return [r for r in records if r.id != (editing_id or 0)]


def is_valid(errors: dict[str, str]) -> bool:
    return not errors


def validate_student(form: dict[str, Any], students: Iterable[Any], editing_id: int | None = None) -> dict[str, str]:
    errors: dict[str, str] = {}

    name = _text(form, "name")
    email = _text(form, "email")
    phone = _text(form, "phone")

    if not name.strip():
        errors["name"] = "Name is required"

    if not email.strip():
        errors["email"] = "Email is required"
    elif not EMAIL_RE.search(email):
        errors["email"] = "Email is invalid"

    if not phone.strip():
        errors["phone"] = "Phone is required"
    elif not STUDENT_PHONE_RE.match(phone):
        errors["phone"] = "Phone format should be +91 XXXXXXXXXX"

    if not _text(form, "seatNumber"):
        errors["seatNumber"] = "Please select a seat"

    if _text(form, "planType") not in ("", FULL_TIME, HALF_TIME):
        errors["planType"] = "Plan must be full-time or half-time"

    for other in _others(students, editing_id):
        if email and other.email == email:
            errors["email"] = "Email already exists"
        if phone and other.phone == phone:
            errors["phone"] = "Phone number already exists"

    return errors


def validate_employee(form: dict[str, Any], employees: Iterable[Any], editing_id: int | None = None) -> dict[str, str]:
    errors: dict[str, str] = {}

    email = _text(form, "email")

    if not _text(form, "name").strip():
        errors["name"] = "Name is required"

    if not email.strip():
        errors["email"] = "Email is required"
    elif not EMAIL_RE.search(email):
        errors["email"] = "Email is invalid"

    if not _text(form, "phone").strip():
        errors["phone"] = "Phone is required"

    if not _text(form, "department").strip():
        errors["department"] = "Department is required"

    if not _text(form, "position").strip():
        errors["position"] = "Position is required"

    try:
        salary = float(form.get("baseSalary") or 0)
    except (TypeError, ValueError):
        salary = 0
    if salary <= 0:
        errors["baseSalary"] = "Base salary must be greater than 0"

    for other in _others(employees, editing_id):
        if email and other.email == email:
            errors["email"] = "Email already exists"

    return errors


def validate_payment_amount(amount: Any) -> dict[str, str]:
    try:
        value = float(amount)
    except (TypeError, ValueError):
        return {"amount": "Please enter a valid amount"}
    if value <= 0:
        return {"amount": "Please enter a valid amount"}
    return {}


def validate_payment_method(method: str) -> dict[str, str]:
    if method not in PAYMENT_METHODS:
        return {"method": f"Payment method must be one of: {', '.join(PAYMENT_METHODS)}"}
    return {}


def _time_range_errors(start: str, end: str, key: str, label: str) -> dict[str, str]:
    if not TIME_RE.match(start or "") or not TIME_RE.match(end or ""):
        return {key: f"{label} times must be in HH:MM format"}
    # Zero-padded HH:MM strings order the same as the times they denote.
    if start >= end:
        return {key: f"{label} start time must be before end time"}
    return {}


def validate_timings(timings: dict[str, str]) -> dict[str, str]:
    errors: dict[str, str] = {}
    errors.update(_time_range_errors(timings.get("fullTimeStart", ""), timings.get("fullTimeEnd", ""), "fullTime", "Full-time"))
    errors.update(_time_range_errors(timings.get("halfTimeStart", ""), timings.get("halfTimeEnd", ""), "halfTime", "Half-time"))
    return errors


def validate_custom_timing(start: str, end: str, use_custom: bool) -> dict[str, str]:
    if not use_custom:
        return {}
    if not start or not end:
        return {"customTiming": "Please set both start and end times for custom timing"}
    return _time_range_errors(start, end, "customTiming", "Custom")
