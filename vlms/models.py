from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .constants import ACTIVE, FULL_TIME, HALF_TIME, PAID, PENDING, PLAN_FEES, SEAT_TOTAL


def _num(value: Any, default: float = 0) -> float | int:
    """Parse a JSON number, keeping ints as ints."""
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return value
    try:
        f = float(value)
    except (TypeError, ValueError):
        return default
    return int(f) if f.is_integer() else f


def _int(value: Any, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _extra(d: dict[str, Any], known: set[str]) -> dict[str, Any]:
    return {k: v for k, v in d.items() if k not in known}


def fee_for_plan(plan_type: str) -> int:
    return PLAN_FEES[FULL_TIME] if plan_type == FULL_TIME else PLAN_FEES[HALF_TIME]


def calculate_net_salary(base_salary: float, deductions: float, bonuses: float) -> float:
    return base_salary - deductions + bonuses


def seat_label(n: int) -> str:
    return f"{n:02d}"


@dataclass
class Payment:
    id: int
    date: str
    amount: float
    method: str = "Cash"
    status: str = PAID
    month: str = ""
    notes: str = ""
    payment_id: int | None = None
    timestamp: str = ""

    @property
    def value(self) -> float:
        return self.amount

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "Payment":
        return Payment(
            id=_int(d.get("id"), 0),
            date=str(d.get("date", "") or ""),
            amount=_num(d.get("amount", 0)),
            method=str(d.get("method", "Cash")),
            status=str(d.get("status", PAID)),
            month=str(d.get("month", "") or ""),
            notes=str(d.get("notes", "") or ""),
            payment_id=d.get("paymentId"),
            timestamp=str(d.get("timestamp", "") or ""),
        )

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "id": self.id,
            "date": self.date,
            "amount": self.amount,
            "method": self.method,
            "status": self.status,
            "month": self.month,
            "notes": self.notes,
        }
        if self.payment_id is not None:
            d["paymentId"] = self.payment_id
        if self.timestamp:
            d["timestamp"] = self.timestamp
        return d


@dataclass
class SalaryPayment:
    id: int
    date: str
    base_salary: float
    deductions: float = 0
    bonuses: float = 0
    net_salary: float | None = None
    method: str = "Bank Transfer"
    status: str = PAID
    month: str = ""
    notes: str = ""
    payment_id: int | None = None
    timestamp: str = ""

    def __post_init__(self) -> None:
        if self.net_salary is None:
            self.net_salary = calculate_net_salary(self.base_salary, self.deductions, self.bonuses)

    @property
    def value(self) -> float:
        return self.net_salary or 0

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "SalaryPayment":
        net = d.get("netSalary")
        return SalaryPayment(
            id=_int(d.get("id"), 0),
            date=str(d.get("date", "") or ""),
            base_salary=_num(d.get("baseSalary", 0)),
            deductions=_num(d.get("deductions", 0)),
            bonuses=_num(d.get("bonuses", 0)),
            net_salary=None if net is None else _num(net),
            method=str(d.get("method", "Bank Transfer")),
            status=str(d.get("status", PAID)),
            month=str(d.get("month", "") or ""),
            notes=str(d.get("notes", "") or ""),
            payment_id=d.get("paymentId"),
            timestamp=str(d.get("timestamp", "") or ""),
        )

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "id": self.id,
            "date": self.date,
            "month": self.month,
            "baseSalary": self.base_salary,
            "deductions": self.deductions,
            "bonuses": self.bonuses,
            "netSalary": self.net_salary,
            "method": self.method,
            "status": self.status,
            "notes": self.notes,
        }
        if self.payment_id is not None:
            d["paymentId"] = self.payment_id
        if self.timestamp:
            d["timestamp"] = self.timestamp
        return d


@dataclass
class Student:
    id: int
    name: str
    email: str
    phone: str
    seat_number: str
    plan_type: str = HALF_TIME
    address: str = ""
    join_date: str = ""
    last_fee_date: str | None = None
    fee_amount: float = PLAN_FEES[HALF_TIME]
    study_hours: str = ""
    status: str = ACTIVE
    fees_paid: bool = False
    use_custom_timing: bool = False
    custom_start_time: str = ""
    custom_end_time: str = ""
    payment_history: list[Payment] = field(default_factory=list)
    total_paid: float = 0
    extra: dict[str, Any] = field(default_factory=dict)

    _KEYS = {
        "id", "name", "email", "phone", "seatNumber", "planType", "address", "joinDate",
        "lastFeeDate", "feeAmount", "studyHours", "status", "feesPaid", "useCustomTiming",
        "customStartTime", "customEndTime", "paymentHistory", "totalPaid",
    }

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "Student":
        plan = str(d.get("planType", HALF_TIME) or HALF_TIME)
        history = [Payment.from_dict(p) for p in d.get("paymentHistory") or [] if isinstance(p, dict)]
        return Student(
            id=_int(d.get("id"), 0),
            name=str(d.get("name", "") or ""),
            email=str(d.get("email", "") or ""),
            phone=str(d.get("phone", "") or ""),
            seat_number=str(d.get("seatNumber", "") or ""),
            plan_type=plan,
            address=str(d.get("address", "") or ""),
            join_date=str(d.get("joinDate", "") or ""),
            last_fee_date=d.get("lastFeeDate"),
            fee_amount=_num(d.get("feeAmount"), fee_for_plan(plan)),
            study_hours=str(d.get("studyHours", "") or ""),
            status=str(d.get("status", ACTIVE) or ACTIVE),
            fees_paid=bool(d.get("feesPaid", False)),
            use_custom_timing=bool(d.get("useCustomTiming", False)),
            custom_start_time=str(d.get("customStartTime", "") or ""),
            custom_end_time=str(d.get("customEndTime", "") or ""),
            payment_history=history,
            total_paid=_num(d.get("totalPaid", 0)),
            extra=_extra(d, Student._KEYS),
        )

    def to_dict(self) -> dict[str, Any]:
        d = dict(self.extra)
        d.update(
            {
                "id": self.id,
                "name": self.name,
                "email": self.email,
                "phone": self.phone,
                "address": self.address,
                "planType": self.plan_type,
                "seatNumber": self.seat_number,
                "joinDate": self.join_date,
                "lastFeeDate": self.last_fee_date,
                "feeAmount": self.fee_amount,
                "studyHours": self.study_hours,
                "status": self.status,
                "feesPaid": self.fees_paid,
                "useCustomTiming": self.use_custom_timing,
                "customStartTime": self.custom_start_time,
                "customEndTime": self.custom_end_time,
                "paymentHistory": [p.to_dict() for p in self.payment_history],
                "totalPaid": self.total_paid,
            }
        )
        return d


@dataclass
class Employee:
    id: int
    employee_id: str
    name: str
    email: str
    phone: str
    department: str
    position: str
    base_salary: float
    joining_date: str = ""
    status: str = ACTIVE
    bank_account: str = ""
    address: str = ""
    payment_history: list[SalaryPayment] = field(default_factory=list)
    total_paid: float = 0
    last_payment_date: str | None = None
    payment_status: str = PENDING
    extra: dict[str, Any] = field(default_factory=dict)

    _KEYS = {
        "id", "employeeId", "name", "email", "phone", "department", "position", "baseSalary",
        "joiningDate", "status", "bankAccount", "address", "paymentHistory", "totalPaid",
        "lastPaymentDate", "paymentStatus",
    }

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "Employee":
        history = [SalaryPayment.from_dict(p) for p in d.get("paymentHistory") or [] if isinstance(p, dict)]
        status = str(d.get("paymentStatus", PENDING) or PENDING)
        return Employee(
            id=_int(d.get("id"), 0),
            employee_id=str(d.get("employeeId", "") or ""),
            name=str(d.get("name", "") or ""),
            email=str(d.get("email", "") or ""),
            phone=str(d.get("phone", "") or ""),
            department=str(d.get("department", "") or ""),
            position=str(d.get("position", "") or ""),
            base_salary=_num(d.get("baseSalary", 0)),
            joining_date=str(d.get("joiningDate", "") or ""),
            status=str(d.get("status", ACTIVE) or ACTIVE),
            bank_account=str(d.get("bankAccount", "") or ""),
            address=str(d.get("address", "") or ""),
            payment_history=history,
            total_paid=_num(d.get("totalPaid", 0)),
            last_payment_date=d.get("lastPaymentDate"),
            payment_status=PAID if status == PAID else PENDING,
            extra=_extra(d, Employee._KEYS),
        )

    def to_dict(self) -> dict[str, Any]:
        d = dict(self.extra)
        d.update(
            {
                "id": self.id,
                "employeeId": self.employee_id,
                "name": self.name,
                "email": self.email,
                "phone": self.phone,
                "department": self.department,
                "position": self.position,
                "baseSalary": self.base_salary,
                "joiningDate": self.joining_date,
                "status": self.status,
                "bankAccount": self.bank_account,
                "address": self.address,
                "paymentHistory": [p.to_dict() for p in self.payment_history],
                "totalPaid": self.total_paid,
                "lastPaymentDate": self.last_payment_date,
                "paymentStatus": self.payment_status,
            }
        )
        return d


@dataclass
class Department:
    id: int
    name: str
    employee_count: int = 0

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "Department":
        return Department(
            id=_int(d.get("id"), 0),
            name=str(d.get("name", "") or ""),
            employee_count=_int(d.get("employeeCount"), 0),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "employeeCount": self.employee_count}


@dataclass
class SeatLayout:
    total: int = SEAT_TOTAL
    occupied: set[str] = field(default_factory=set)

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "SeatLayout":
        return SeatLayout(
            total=_int(d.get("total"), SEAT_TOTAL),
            occupied={str(s) for s in d.get("occupied") or []},
        )

    def to_dict(self) -> dict[str, Any]:
        return {"total": self.total, "occupied": sorted(self.occupied)}

    def labels(self) -> list[str]:
        return [seat_label(n) for n in range(1, self.total + 1)]

    def is_valid(self, label: str) -> bool:
        return label in self.labels()

    def available(self, current: str | None = None) -> list[str]:
        """Free seats, keeping `current` selectable while its holder is edited."""
        return [s for s in self.labels() if s not in self.occupied or s == current]
