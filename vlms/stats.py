from __future__ import annotations

from datetime import date
from typing import Any

from .constants import ACTIVE, FULL_TIME, HALF_TIME, PENDING
from .models import Department, Employee, SeatLayout, Student


def library_stats(students: list[Student], layout: SeatLayout) -> dict[str, int]:
    return {
        "totalStudents": len(students),
        "activeStudents": sum(1 for s in students if s.status == ACTIVE),
        "feesPending": sum(1 for s in students if not s.fees_paid),
        "fullTimeStudents": sum(1 for s in students if s.plan_type == FULL_TIME),
        "halfTimeStudents": sum(1 for s in students if s.plan_type == HALF_TIME),
        "occupiedSeats": len(layout.occupied),
        "totalSeats": layout.total,
    }


def payroll_stats(employees: list[Employee], departments: list[Department], today: date | None = None) -> dict[str, Any]:
    current_month = (today or date.today()).strftime("%B %Y")
    payments = [p for e in employees for p in e.payment_history]
    this_month = [p for p in payments if p.month == current_month]
    pending = [e for e in employees if e.payment_status == PENDING]
    return {
        "totalEmployees": len(employees),
        "activeEmployees": sum(1 for e in employees if e.status == ACTIVE),
        "totalDepartments": len(departments),
        "totalPaid": sum(e.total_paid for e in employees),
        "totalPayments": len(payments),
        "thisMonthPaid": sum(p.value for p in this_month),
        "thisMonthPayments": len(this_month),
        "pendingPayments": len(pending),
        "pendingAmount": sum(e.base_salary for e in pending),
        "averageSalary": round(sum(e.base_salary for e in employees) / len(employees)) if employees else 0,
    }
