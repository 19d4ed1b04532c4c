from __future__ import annotations

import time
from datetime import date as date_cls
from datetime import datetime

from .constants import PAID, PENDING
from .logger import now_ts, today
from .models import Payment, SalaryPayment, calculate_net_salary
from .repository import EmployeeRepository, StudentRepository
from .validation import validate_payment_method

_last_payment_id = 0


def next_payment_id() -> int:
    """Millisecond timestamp, bumped so two calls never share an id."""
    global _last_payment_id
    _last_payment_id = max(int(time.time() * 1000), _last_payment_id + 1)
    return _last_payment_id


def _month_label(day: str, fmt: str) -> str:
    try:
        return datetime.strptime(day, "%Y-%m-%d").strftime(fmt)
    except ValueError:
        return date_cls.today().strftime(fmt)


class FeeLedger:
    """Append-only fee history for library students."""

    def __init__(self, repository: StudentRepository):
        self.repository = repository

    def history(self, student_id: int) -> list[Payment]:
        student = self.repository.get(student_id)
        return list(student.payment_history) if student else []

    def add_payment(
        self,
        student_id: int,
        amount: float,
        method: str = "Cash",
        notes: str = "",
        date: str | None = None,
    ) -> bool:
        if validate_payment_method(method):
            return False
        student = self.repository.get(student_id)
        if student is None:
            return False
        day = date or today()
        student.payment_history.append(
            Payment(
                id=len(student.payment_history) + 1,
                date=day,
                amount=amount,
                method=method,
                status=PAID,
                month=_month_label(day, "%b %Y"),
                notes=notes,
                payment_id=next_payment_id(),
                timestamp=now_ts(),
            )
        )
        student.total_paid += amount
        student.fees_paid = True
        student.last_fee_date = day
        return self.repository.update(student)

    def mark_unpaid(self, student_id: int) -> bool:
        """Clear the current-period flag; history and totalPaid stay as recorded."""
        student = self.repository.get(student_id)
        if student is None:
            return False
        student.fees_paid = False
        return self.repository.update(student)

    def toggle_fee_payment(self, student_id: int) -> bool:
        student = self.repository.get(student_id)
        if student is None:
            return False
        if student.fees_paid:
            return self.mark_unpaid(student_id)
        return self.add_payment(student_id, student.fee_amount)


class SalaryLedger:
    """Append-only salary history for employees."""

    def __init__(self, repository: EmployeeRepository):
        self.repository = repository

    def history(self, employee_id: int) -> list[SalaryPayment]:
        employee = self.repository.get(employee_id)
        return list(employee.payment_history) if employee else []

    def add_payment(
        self,
        employee_id: int,
        base_salary: float,
        deductions: float = 0,
        bonuses: float = 0,
        method: str = "Bank Transfer",
        notes: str = "",
        date: str | None = None,
        month: str | None = None,
    ) -> bool:
        if validate_payment_method(method):
            return False
        employee = self.repository.get(employee_id)
        if employee is None:
            return False
        day = date or today()
        # Net pay may be negative when deductions exceed salary and bonuses.
        net = calculate_net_salary(base_salary, deductions, bonuses)
        employee.payment_history.append(
            SalaryPayment(
                id=len(employee.payment_history) + 1,
                date=day,
                base_salary=base_salary,
                deductions=deductions,
                bonuses=bonuses,
                net_salary=net,
                method=method,
                status=PAID,
                month=month or _month_label(day, "%B %Y"),
                notes=notes,
                payment_id=next_payment_id(),
                timestamp=now_ts(),
            )
        )
        employee.total_paid += net
        employee.payment_status = PAID
        employee.last_payment_date = day
        return self.repository.update(employee)

    def mark_pending(self, employee_id: int) -> bool:
        employee = self.repository.get(employee_id)
        if employee is None:
            return False
        employee.payment_status = PENDING
        return self.repository.update(employee)
