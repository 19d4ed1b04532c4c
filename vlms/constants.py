from __future__ import annotations

from pathlib import Path

WORKSPACE_ROOT = Path(__file__).resolve().parents[1]
DATA_DIR = WORKSPACE_ROOT / "data"
STORE_JSON_PATH = DATA_DIR / "local_storage.json"
ERROR_LOG_PATH = DATA_DIR / "error_log.txt"

LIBRARY = "library"
PAYROLL = "payroll"

# Logical collection name -> namespaced storage key.
LIBRARY_KEYS = {
    "students": "library_students",
    "seat_layout": "library_seat_layout",
    "timings": "library_timings",
    "activity": "library_activity",
}
PAYROLL_KEYS = {
    "employees": "payroll_employees",
    "departments": "payroll_departments",
    "payments": "payroll_payments",
    "settings": "payroll_settings",
    "activity": "payroll_activity",
}

FULL_TIME = "full-time"
HALF_TIME = "half-time"
PLAN_FEES = {FULL_TIME: 800, HALF_TIME: 500}

SEAT_TOTAL = 80

PAID = "Paid"
PENDING = "Pending"
ACTIVE = "Active"

PAYMENT_METHODS = ("Cash", "UPI", "Card", "Bank Transfer", "Check")

EMPLOYEE_ID_PREFIX = "EMP"
EMPLOYEE_ID_WIDTH = 3

RECENT_LIMIT = 5
ACTIVITY_LIMIT = 500
