from __future__ import annotations

import logging
import re
from typing import Any, Callable, Generic, TypeVar

from .constants import (
    ACTIVE,
    EMPLOYEE_ID_PREFIX,
    EMPLOYEE_ID_WIDTH,
    PENDING,
    RECENT_LIMIT,
    SEAT_TOTAL,
)
from .logger import today
from .models import Department, Employee, SeatLayout, Student, fee_for_plan
from .storage import Store

log = logging.getLogger(__name__)

T = TypeVar("T", Student, Employee)


class _Repository(Generic[T]):
    """Whole-collection CRUD over one store key.

    Every write goes through `_write`, which also rewrites the derived cache
    (seat layout or department counts) and restores both keys if either write
    fails.
    """

    collection: str = ""
    cache: str = ""
    model: Callable[[dict[str, Any]], T]

    def __init__(self, store: Store):
        self.store = store

    @property
    def err_logger(self):
        return self.store.err_logger

    def _rows(self) -> list[dict[str, Any]]:
        rows = self.store.get(self.collection)
        return [r for r in rows if isinstance(r, dict)] if isinstance(rows, list) else []

    def list(self) -> list[T]:
        return [self.model(r) for r in self._rows()]

    def get(self, entity_id: int) -> T | None:
        for record in self.list():
            if record.id == entity_id:
                return record
        return None

    def recent(self, limit: int = RECENT_LIMIT) -> list[T]:
        records = self.list()
        return list(reversed(records[-limit:])) if limit > 0 else []

    @staticmethod
    def _next_id(records: list[T]) -> int:
        return max([r.id for r in records], default=0) + 1

    def _cache_value(self, records: list[T]) -> Any:
        raise NotImplementedError

    def _write(self, records: list[T]) -> bool:
        snap = self.store.snapshot([self.collection, self.cache])
        if not self.store.set(self.collection, [r.to_dict() for r in records]):
            self.store.restore(snap)
            return False
        if not self.store.set(self.cache, self._cache_value(records)):
            log.warning("Rolling back %s after %s write failed", self.collection, self.cache)
            self.store.restore(snap)
            return False
        return True

    def sync(self) -> bool:
        """Rewrite the derived cache from the current collection."""
        return self.store.set(self.cache, self._cache_value(self.list()))

    def delete(self, entity_id: int) -> bool:
        try:
            records = self.list()
            remaining = [r for r in records if r.id != entity_id]
            if len(remaining) == len(records):
                return False
            return self._write(remaining)
        except Exception as e:
            self.err_logger.log_exception(e, f"delete: {self.collection}")
            return False


class StudentRepository(_Repository[Student]):
    collection = "students"
    cache = "seat_layout"
    model = staticmethod(Student.from_dict)

    def __init__(self, store: Store, total_seats: int = SEAT_TOTAL):
        super().__init__(store)
        self.total_seats = total_seats

    def _layout(self, records: list[Student]) -> SeatLayout:
        return SeatLayout(total=self.total_seats, occupied={s.seat_number for s in records if s.seat_number})

    def _cache_value(self, records: list[Student]) -> Any:
        return self._layout(records).to_dict()

    def seat_layout(self) -> SeatLayout:
        return self._layout(self.list())

    def available_seats(self, current: str | None = None) -> list[str]:
        return self.seat_layout().available(current)

    def _seat_free(self, records: list[Student], seat: str, owner_id: int | None = None) -> bool:
        if not self._layout([]).is_valid(seat):
            return False
        return all(s.seat_number != seat or s.id == owner_id for s in records)

    def add(self, partial: dict[str, Any]) -> Student | None:
        """Create a student and claim its seat in one write.

        Returns None when the seat is out of range or taken, or when persisting
        fails (in which case nothing is left behind).
        """
        try:
            records = self.list()
            seat = str(partial.get("seatNumber", "") or "")
            if not self._seat_free(records, seat):
                log.info("Seat %r is not available", seat)
                return None
            data = dict(partial)
            data["id"] = self._next_id(records)
            data["seatNumber"] = seat
            data["feeAmount"] = fee_for_plan(str(data.get("planType", "")))
            data.setdefault("paymentHistory", [])
            data.setdefault("totalPaid", 0)
            data.setdefault("feesPaid", False)
            data.setdefault("status", ACTIVE)
            data.setdefault("joinDate", today())
            student = Student.from_dict(data)
            if not self._write(records + [student]):
                return None
            return student
        except Exception as e:
            self.err_logger.log_exception(e, "add_student")
            return None

    def update(self, student: Student) -> bool:
        try:
            records = self.list()
            for i, current in enumerate(records):
                if current.id != student.id:
                    continue
                if student.seat_number != current.seat_number and not self._seat_free(records, student.seat_number, student.id):
                    return False
                student.fee_amount = fee_for_plan(student.plan_type)
                records[i] = student
                return self._write(records)
            return False
        except Exception as e:
            self.err_logger.log_exception(e, "update_student")
            return False

    def search(self, term: str) -> list[Student]:
        needle = term.lower()
        return [
            s
            for s in self.list()
            if needle in s.name.lower()
            or needle in s.email.lower()
            or needle in s.seat_number.lower()
            or term in s.phone
        ]


class EmployeeRepository(_Repository[Employee]):
    collection = "employees"
    cache = "departments"
    model = staticmethod(Employee.from_dict)

    def _department_rows(self) -> list[Department]:
        rows = self.store.get("departments")
        return [Department.from_dict(r) for r in rows if isinstance(r, dict)] if isinstance(rows, list) else []

    def _count(self, departments: list[Department], records: list[Employee]) -> list[Department]:
        for dept in departments:
            dept.employee_count = sum(1 for e in records if e.department == dept.name)
        return departments

    def _cache_value(self, records: list[Employee]) -> Any:
        return [d.to_dict() for d in self._count(self._department_rows(), records)]

    def departments(self) -> list[Department]:
        return self._count(self._department_rows(), self.list())

    def add_department(self, name: str) -> bool:
        name = name.strip()
        departments = self._department_rows()
        if not name or any(d.name == name for d in departments):
            return False
        new_id = max([d.id for d in departments], default=0) + 1
        departments.append(Department(id=new_id, name=name))
        return self.store.set("departments", [d.to_dict() for d in self._count(departments, self.list())])

    def generate_id(self) -> str:
        max_n = 0
        pattern = re.compile(rf"^{EMPLOYEE_ID_PREFIX}0*(\d+)$")
        for e in self.list():
            m = pattern.match(e.employee_id)
            if m:
                max_n = max(max_n, int(m.group(1)))
        return f"{EMPLOYEE_ID_PREFIX}{max_n + 1:0{EMPLOYEE_ID_WIDTH}d}"

    def add(self, partial: dict[str, Any]) -> Employee | None:
        try:
            records = self.list()
            data = dict(partial)
            data["id"] = self._next_id(records)
            if not data.get("employeeId"):
                data["employeeId"] = self.generate_id()
            elif any(e.employee_id == data["employeeId"] for e in records):
                log.info("Employee id %r is already taken", data["employeeId"])
                return None
            data.setdefault("paymentHistory", [])
            data.setdefault("totalPaid", 0)
            data.setdefault("paymentStatus", PENDING)
            data.setdefault("status", ACTIVE)
            data.setdefault("joiningDate", today())
            employee = Employee.from_dict(data)
            if not self._write(records + [employee]):
                return None
            return employee
        except Exception as e:
            self.err_logger.log_exception(e, "add_employee")
            return None

    def update(self, employee: Employee) -> bool:
        try:
            records = self.list()
            for i, current in enumerate(records):
                if current.id == employee.id:
                    if any(e.employee_id == employee.employee_id and e.id != employee.id for e in records):
                        return False
                    records[i] = employee
                    return self._write(records)
            return False
        except Exception as e:
            self.err_logger.log_exception(e, "update_employee")
            return False

    def search(self, term: str) -> list[Employee]:
        needle = term.lower()
        return [
            e
            for e in self.list()
            if needle in e.name.lower()
            or needle in e.email.lower()
            or needle in e.employee_id.lower()
            or needle in e.department.lower()
        ]
