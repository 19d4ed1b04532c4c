"""Action layer for the library and payroll screens.

Each action runs validate -> mutate -> record activity and returns a
Notification for the screen to show; the screen then re-reads the collection.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from . import backup
from .constants import HALF_TIME
from .ledger import FeeLedger, SalaryLedger
from .logger import AppEvent, now_ts
from .models import Employee, Student, fee_for_plan
from .repository import EmployeeRepository, StudentRepository
from .settings_store import Settings, SettingsStore
from .stats import library_stats, payroll_stats
from .storage import Store
from .validation import (
    validate_custom_timing,
    validate_employee,
    validate_payment_amount,
    validate_payment_method,
    validate_student,
)

SUCCESS = "success"
ERROR = "error"


@dataclass
class Notification:
    message: str
    kind: str = SUCCESS
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.kind == SUCCESS


def _fail(message: str, errors: dict[str, str] | None = None) -> Notification:
    return Notification(message, ERROR, errors or {})


class _BaseApp:
    entity_type = ""

    def __init__(self, store: Store):
        self.store = store
        self.err_logger = store.err_logger
        self.store.initialize()

    def _emit(self, action: str, entity_id: Any, details: str = "") -> None:
        self.store.add_event(
            AppEvent(timestamp=now_ts(), action=action, entity_type=self.entity_type, entity_id=str(entity_id), details=details)
        )

    def activity(self, limit: int = 500) -> list[AppEvent]:
        return self.store.list_events(limit)

    def export_data(self) -> str | None:
        return backup.export_data(self.store)

    def export_workbook(self, path: Path) -> Notification:
        if backup.export_workbook(self.store, path):
            return Notification(f"Report saved to {path}")
        return _fail("Error exporting report. Please try again.")

    def import_data(self, text: str) -> Notification:
        if not backup.import_data(self.store, text):
            return _fail("Error importing data. Please check the file format.")
        self._emit("import_data", "", "restored from backup")
        return Notification("Data imported successfully!")

    def clear(self) -> Notification:
        if not self.store.clear():
            return _fail("Error clearing data. Please try again.")
        return Notification("All data cleared")


class LibraryApp(_BaseApp):
    entity_type = "student"

    def __init__(self, store: Store):
        super().__init__(store)
        self.students = StudentRepository(store)
        self.ledger = FeeLedger(self.students)
        self.settings_store = SettingsStore(store)

    def refresh(self) -> list[Student]:
        return self.students.list()

    def stats(self) -> dict[str, int]:
        return library_stats(self.students.list(), self.students.seat_layout())

    def _study_hours(self, form: dict[str, Any], plan: str) -> str:
        start, end = form.get("customStartTime") or "", form.get("customEndTime") or ""
        if form.get("useCustomTiming") and start and end:
            return f"{start} - {end}"
        return self.settings_store.load().plan_hours(plan)

    def save_student(self, form: dict[str, Any], editing_id: int | None = None) -> Notification:
        existing = self.students.get(editing_id) if editing_id else None
        if editing_id and existing is None:
            return _fail("Student not found")

        errors = validate_student(form, self.students.list(), editing_id)
        seat = str(form.get("seatNumber") or "")
        if seat and "seatNumber" not in errors and seat not in self.students.available_seats(existing.seat_number if existing else None):
            errors["seatNumber"] = "Seat is not available"
        method = form.get("paymentMethod") or "Cash"
        if form.get("feesPaid"):
            errors.update(validate_payment_method(method))
        if errors:
            return _fail("Please fix the errors in the form", errors)

        plan = form.get("planType") or HALF_TIME
        fields = {
            "name": str(form["name"]).strip(),
            "email": form["email"],
            "phone": form["phone"],
            "address": form.get("address") or "",
            "planType": plan,
            "seatNumber": seat,
            "studyHours": self._study_hours(form, plan),
            "useCustomTiming": bool(form.get("useCustomTiming")),
            "customStartTime": form.get("customStartTime") or "",
            "customEndTime": form.get("customEndTime") or "",
        }
        try:
            if existing is None:
                return self._add_student(fields, bool(form.get("feesPaid")), method)
            return self._edit_student(existing, fields, bool(form.get("feesPaid")), method)
        except Exception as e:
            self.err_logger.log_exception(e, "save_student")
            return _fail("Error saving student. Please try again.")

    def _add_student(self, fields: dict[str, Any], fees_paid: bool, method: str) -> Notification:
        student = self.students.add(fields)
        if student is None:
            return _fail("Error adding student. Please try again.")
        self._emit("add_student", student.id, f"{student.name} seat {student.seat_number}")
        if fees_paid and not self.ledger.add_payment(student.id, student.fee_amount, method):
            return _fail("Student added but the payment could not be recorded.")
        return Notification("Student added successfully!")

    def _edit_student(self, existing: Student, fields: dict[str, Any], fees_paid: bool, method: str) -> Notification:
        data = existing.to_dict()
        data.update(fields)
        data["feeAmount"] = fee_for_plan(fields["planType"])
        updated = Student.from_dict(data)
        if not fees_paid:
            updated.fees_paid = False
        if not self.students.update(updated):
            return _fail("Error updating student. Please try again.")
        if fees_paid and not existing.fees_paid and not self.ledger.add_payment(existing.id, updated.fee_amount, method):
            return _fail("Student updated but the payment could not be recorded.")
        self._emit("edit_student", existing.id, "updated profile")
        return Notification("Student updated successfully!")

    def delete_student(self, student_id: int) -> Notification:
        student = self.students.get(student_id)
        if student is None or not self.students.delete(student_id):
            return _fail("Error deleting student. Please try again.")
        self._emit("delete_student", student_id, f"released seat {student.seat_number}")
        return Notification("Student deleted successfully!")

    def record_payment(self, student_id: int, amount: Any, method: str = "Cash", notes: str = "") -> Notification:
        errors = validate_payment_amount(amount)
        errors.update(validate_payment_method(method))
        if errors:
            return _fail(next(iter(errors.values())), errors)
        if not self.ledger.add_payment(student_id, float(amount), method, notes):
            return _fail("Error recording payment. Please try again.")
        self._emit("add_payment", student_id, f"{float(amount):g} via {method}")
        return Notification("Payment recorded successfully!")

    def toggle_fee_payment(self, student_id: int) -> Notification:
        student = self.students.get(student_id)
        if student is None:
            return _fail("Student not found")
        if not student.fees_paid:
            return self.record_payment(student_id, student.fee_amount)
        if not self.ledger.mark_unpaid(student_id):
            return _fail("Error updating payment status. Please try again.")
        self._emit("mark_unpaid", student_id, "fee marked pending")
        return Notification("Payment status updated!")

    def timings(self) -> Settings:
        return self.settings_store.load()

    def update_timings(self, settings: Settings) -> Notification:
        errors = self.settings_store.save(settings)
        if errors:
            return _fail(next(iter(errors.values())), errors)
        self._emit("update_timings", "", "study timings changed")
        return Notification("Study timings updated successfully!")

    def update_student_timing(self, student_id: int, start: str, end: str, use_custom: bool) -> Notification:
        errors = validate_custom_timing(start, end, use_custom)
        if errors:
            return _fail(errors["customTiming"], errors)
        student = self.students.get(student_id)
        if student is None:
            return _fail("Student not found")
        student.custom_start_time = start
        student.custom_end_time = end
        student.use_custom_timing = use_custom
        if not self.students.update(student):
            return _fail("Error updating student timing. Please try again.")
        self._emit("update_student_timing", student_id, f"{start} - {end}" if use_custom else "plan timing")
        return Notification("Student timing updated successfully!")


class PayrollApp(_BaseApp):
    entity_type = "employee"

    def __init__(self, store: Store):
        super().__init__(store)
        self.employees = EmployeeRepository(store)
        self.ledger = SalaryLedger(self.employees)

    def refresh(self) -> list[Employee]:
        return self.employees.list()

    def stats(self) -> dict[str, Any]:
        return payroll_stats(self.employees.list(), self.employees.departments())

    def save_employee(self, form: dict[str, Any], editing_id: int | None = None) -> Notification:
        existing = self.employees.get(editing_id) if editing_id else None
        if editing_id and existing is None:
            return _fail("Employee not found")
        errors = validate_employee(form, self.employees.list(), editing_id)
        if errors:
            return _fail("Please fix the errors in the form", errors)

        fields = {
            "name": str(form["name"]).strip(),
            "email": form["email"],
            "phone": form["phone"],
            "department": form["department"],
            "position": form["position"],
            "baseSalary": float(form["baseSalary"]),
            "bankAccount": form.get("bankAccount") or "",
            "address": form.get("address") or "",
        }
        if form.get("joiningDate"):
            fields["joiningDate"] = form["joiningDate"]
        try:
            if existing is None:
                employee = self.employees.add(fields)
                if employee is None:
                    return _fail("Error adding employee. Please try again.")
                self._emit("add_employee", employee.employee_id, f"{employee.name} ({employee.department})")
                return Notification("Employee added successfully!")
            data = existing.to_dict()
            data.update(fields)
            if not self.employees.update(Employee.from_dict(data)):
                return _fail("Error updating employee. Please try again.")
            self._emit("edit_employee", existing.employee_id, "updated profile")
            return Notification("Employee updated successfully!")
        except Exception as e:
            self.err_logger.log_exception(e, "save_employee")
            return _fail("Error saving employee. Please try again.")

    def delete_employee(self, employee_id: int) -> Notification:
        employee = self.employees.get(employee_id)
        if employee is None or not self.employees.delete(employee_id):
            return _fail("Error deleting employee. Please try again.")
        self._emit("delete_employee", employee.employee_id, employee.department)
        return Notification("Employee deleted successfully!")

    def pay_salary(
        self,
        employee_id: int,
        base_salary: Any,
        deductions: Any = 0,
        bonuses: Any = 0,
        method: str = "Bank Transfer",
        notes: str = "",
    ) -> Notification:
        errors = validate_payment_amount(base_salary)
        errors.update(validate_payment_method(method))
        if errors:
            return _fail(next(iter(errors.values())), errors)
        try:
            deductions, bonuses = float(deductions or 0), float(bonuses or 0)
        except (TypeError, ValueError):
            return _fail("Deductions and bonuses must be numbers")
        if not self.ledger.add_payment(employee_id, float(base_salary), deductions, bonuses, method, notes):
            return _fail("Error recording payment. Please try again.")
        self._emit("pay_salary", employee_id, f"{float(base_salary) - deductions + bonuses:g} via {method}")
        return Notification("Payment recorded successfully!")

    def add_department(self, name: str) -> Notification:
        if not self.employees.add_department(name):
            return _fail("Department name is required and must be unique")
        self._emit("add_department", name.strip())
        return Notification("Department added successfully!")
