from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any

from openpyxl import Workbook

from .constants import LIBRARY, PAYROLL, SEAT_TOTAL
from .errors import ImportShapeError
from .models import Department, Employee, SeatLayout, Student
from .repository import EmployeeRepository, StudentRepository
from .storage import Store

log = logging.getLogger(__name__)

# Export document key -> store collection name.
EXPORT_COLLECTIONS = {
    LIBRARY: {"students": "students", "seatLayout": "seat_layout", "timings": "timings"},
    PAYROLL: {"employees": "employees", "departments": "departments"},
}
REQUIRED_COLLECTIONS = {
    LIBRARY: ("students",),
    PAYROLL: ("employees", "departments"),
}


def domain_of(store: Store) -> str:
    return LIBRARY if store.primary == "students" else PAYROLL


def _repository(store: Store) -> StudentRepository | EmployeeRepository:
    return StudentRepository(store) if domain_of(store) == LIBRARY else EmployeeRepository(store)


def export_data(store: Store) -> str | None:
    try:
        data: dict[str, Any] = {}
        for doc_key, name in EXPORT_COLLECTIONS[domain_of(store)].items():
            value = store.get(name)
            if value is not None:
                data[doc_key] = value
        data["exportDate"] = datetime.now().isoformat()
        return json.dumps(data, indent=2)
    except Exception as e:
        store.err_logger.log_exception(e, "export_data")
        return None


def _check_records(rows: Any, key: str, parse) -> list[Any]:
    if not isinstance(rows, list) or not all(isinstance(r, dict) for r in rows):
        raise ImportShapeError(f"{key} must be a list of objects")
    records = [parse(r) for r in rows]
    ids = [r.id for r in records]
    if len(set(ids)) != len(ids):
        raise ImportShapeError(f"{key} contains duplicate ids")
    return records


def parse_document(text: str, domain: str) -> dict[str, Any]:
    """Parse and shape-check an export document without touching any store."""
    try:
        data = json.loads(text)
    except (TypeError, ValueError) as e:
        raise ImportShapeError(f"not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ImportShapeError("document must be a JSON object")
    missing = [k for k in REQUIRED_COLLECTIONS[domain] if k not in data]
    if missing:
        raise ImportShapeError(f"missing collections: {', '.join(missing)}")

    if domain == LIBRARY:
        students = _check_records(data["students"], "students", Student.from_dict)
        seats = [s.seat_number for s in students if s.seat_number]
        if len(set(seats)) != len(seats):
            raise ImportShapeError("students share a seat")
        layout = SeatLayout(total=SEAT_TOTAL)
        if any(not layout.is_valid(seat) for seat in seats):
            raise ImportShapeError("students hold seats outside the layout")
        if "timings" in data and not isinstance(data["timings"], dict):
            raise ImportShapeError("timings must be an object")
    else:
        employees = _check_records(data["employees"], "employees", Employee.from_dict)
        codes = [e.employee_id for e in employees if e.employee_id]
        if len(set(codes)) != len(codes):
            raise ImportShapeError("employees contains duplicate employee ids")
        departments = _check_records(data["departments"], "departments", Department.from_dict)
        names = [d.name for d in departments]
        if len(set(names)) != len(names):
            raise ImportShapeError("department names must be unique")
    return data


def import_data(store: Store, text: str) -> bool:
    """Replace the domain's collections with the document's, or change nothing."""
    domain = domain_of(store)
    try:
        data = parse_document(text, domain)
    except ImportShapeError as e:
        store.err_logger.log_exception(e, "import_data")
        return False

    targets = {name: data[key] for key, name in EXPORT_COLLECTIONS[domain].items() if key in data}
    try:
        snap = store.snapshot(EXPORT_COLLECTIONS[domain].values())
    except Exception as e:
        store.err_logger.log_exception(e, "import_data")
        return False
    for name, value in targets.items():
        if not store.set(name, value):
            store.restore(snap)
            return False
    # Derived caches follow the imported entities, not the document's copy.
    if not _repository(store).sync():
        store.restore(snap)
        return False
    log.info("Imported %s backup", domain)
    return True


def _sheet(wb: Workbook, title: str, headers: list[str], rows: list[dict[str, Any]]) -> None:
    ws = wb.create_sheet(title)
    ws.append(headers)
    for r in rows:
        ws.append([r.get(h, "") for h in headers])


def export_workbook(store: Store, path: Path) -> bool:
    """Write the domain's collections into an .xlsx report."""
    try:
        wb = Workbook()
        wb.remove(wb.active)
        if domain_of(store) == LIBRARY:
            people = [s.to_dict() for s in StudentRepository(store).list()]
            person_headers = [
                "id", "name", "email", "phone", "address", "planType", "seatNumber",
                "joinDate", "lastFeeDate", "feeAmount", "studyHours", "status", "feesPaid", "totalPaid",
            ]
            payment_headers = ["studentId", "id", "date", "month", "amount", "method", "status", "notes", "paymentId"]
            owner, title = "studentId", "Students"
        else:
            repo = EmployeeRepository(store)
            people = [e.to_dict() for e in repo.list()]
            person_headers = [
                "id", "employeeId", "name", "email", "phone", "department", "position", "baseSalary",
                "joiningDate", "status", "totalPaid", "lastPaymentDate", "paymentStatus",
            ]
            payment_headers = [
                "employeeId", "id", "date", "month", "baseSalary", "deductions", "bonuses",
                "netSalary", "method", "status", "notes", "paymentId",
            ]
            owner, title = "employeeId", "Employees"
            _sheet(wb, "Departments", ["id", "name", "employeeCount"], [d.to_dict() for d in repo.departments()])

        _sheet(wb, title, person_headers, people)
        payments = []
        for p in people:
            for h in p["paymentHistory"]:
                payments.append({**h, owner: p["id"] if owner == "studentId" else p["employeeId"]})
        _sheet(wb, "Payments", payment_headers, payments)

        path.parent.mkdir(parents=True, exist_ok=True)
        wb.save(path)
        return True
    except Exception as e:
        store.err_logger.log_exception(e, "export_workbook")
        return False
