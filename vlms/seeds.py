"""Sample records written into an empty store on first start."""
from __future__ import annotations

from typing import Any

from .constants import SEAT_TOTAL


def library_seed() -> dict[str, Any]:
    students = [
        {
            "id": 1,
            "name": "Rahul Sharma",
            "email": "rahul.sharma@gmail.com",
            "phone": "+91 9876543210",
            "address": "12 MG Road, Jaipur",
            "planType": "full-time",
            "seatNumber": "01",
            "joinDate": "2024-01-05",
            "lastFeeDate": "2024-02-05",
            "feeAmount": 800,
            "studyHours": "09:00 - 21:00",
            "status": "Active",
            "feesPaid": True,
            "useCustomTiming": False,
            "customStartTime": "",
            "customEndTime": "",
            "paymentHistory": [
                {"id": 1, "date": "2024-01-05", "amount": 800, "method": "Cash", "status": "Paid", "month": "Jan 2024", "notes": ""},
                {"id": 2, "date": "2024-02-05", "amount": 800, "method": "UPI", "status": "Paid", "month": "Feb 2024", "notes": ""},
            ],
            "totalPaid": 1600,
        },
        {
            "id": 2,
            "name": "Priya Verma",
            "email": "priya.verma@gmail.com",
            "phone": "+91 9123456780",
            "address": "45 Civil Lines, Jaipur",
            "planType": "half-time",
            "seatNumber": "07",
            "joinDate": "2024-01-12",
            "lastFeeDate": "2024-01-12",
            "feeAmount": 500,
            "studyHours": "09:00 - 14:00",
            "status": "Active",
            "feesPaid": False,
            "useCustomTiming": False,
            "customStartTime": "",
            "customEndTime": "",
            "paymentHistory": [
                {"id": 1, "date": "2024-01-12", "amount": 500, "method": "Cash", "status": "Paid", "month": "Jan 2024", "notes": ""},
            ],
            "totalPaid": 500,
        },
        {
            "id": 3,
            "name": "Amit Kumar",
            "email": "amit.kumar@gmail.com",
            "phone": "+91 9988776655",
            "address": "8 Station Road, Jaipur",
            "planType": "half-time",
            "seatNumber": "12",
            "joinDate": "2024-02-01",
            "lastFeeDate": None,
            "feeAmount": 500,
            "studyHours": "15:00 - 20:00",
            "status": "Active",
            "feesPaid": False,
            "useCustomTiming": True,
            "customStartTime": "15:00",
            "customEndTime": "20:00",
            "paymentHistory": [],
            "totalPaid": 0,
        },
    ]
    return {
        "students": students,
        "seat_layout": {"total": SEAT_TOTAL, "occupied": sorted(s["seatNumber"] for s in students)},
    }


def payroll_seed() -> dict[str, Any]:
    employees = [
        {
            "id": 1,
            "employeeId": "EMP001",
            "name": "John Smith",
            "email": "john.smith@company.com",
            "phone": "+1 555-0101",
            "department": "Engineering",
            "position": "Senior Developer",
            "baseSalary": 5000,
            "joiningDate": "2023-01-15",
            "status": "Active",
            "bankAccount": "****1234",
            "address": "123 Main St, New York, NY",
            "paymentHistory": [
                {
                    "id": 1, "date": "2024-01-31", "month": "January 2024", "baseSalary": 5000,
                    "deductions": 500, "bonuses": 1000, "netSalary": 5500, "method": "Bank Transfer",
                    "status": "Paid", "notes": "Regular monthly salary", "paymentId": 1001,
                },
                {
                    "id": 2, "date": "2024-02-29", "month": "February 2024", "baseSalary": 5000,
                    "deductions": 500, "bonuses": 0, "netSalary": 4500, "method": "Bank Transfer",
                    "status": "Paid", "notes": "Regular monthly salary", "paymentId": 1002,
                },
            ],
            "totalPaid": 10000,
            "lastPaymentDate": "2024-02-29",
            "paymentStatus": "Paid",
        },
        {
            "id": 2,
            "employeeId": "EMP002",
            "name": "Sarah Johnson",
            "email": "sarah.johnson@company.com",
            "phone": "+1 555-0102",
            "department": "Marketing",
            "position": "Marketing Manager",
            "baseSalary": 4500,
            "joiningDate": "2023-03-20",
            "status": "Active",
            "bankAccount": "****5678",
            "address": "456 Oak Ave, Los Angeles, CA",
            "paymentHistory": [
                {
                    "id": 1, "date": "2024-01-31", "month": "January 2024", "baseSalary": 4500,
                    "deductions": 450, "bonuses": 500, "netSalary": 4550, "method": "Bank Transfer",
                    "status": "Paid", "notes": "Regular monthly salary + performance bonus", "paymentId": 1003,
                },
            ],
            "totalPaid": 4550,
            "lastPaymentDate": "2024-01-31",
            "paymentStatus": "Pending",
        },
        {
            "id": 3,
            "employeeId": "EMP003",
            "name": "Michael Chen",
            "email": "michael.chen@company.com",
            "phone": "+1 555-0103",
            "department": "Sales",
            "position": "Sales Executive",
            "baseSalary": 4000,
            "joiningDate": "2023-06-10",
            "status": "Active",
            "bankAccount": "****9012",
            "address": "789 Pine Rd, Chicago, IL",
            "paymentHistory": [
                {
                    "id": 1, "date": "2024-01-31", "month": "January 2024", "baseSalary": 4000,
                    "deductions": 400, "bonuses": 2000, "netSalary": 5600, "method": "Bank Transfer",
                    "status": "Paid", "notes": "Regular salary + sales commission", "paymentId": 1004,
                },
                {
                    "id": 2, "date": "2024-02-29", "month": "February 2024", "baseSalary": 4000,
                    "deductions": 400, "bonuses": 1500, "netSalary": 5100, "method": "Bank Transfer",
                    "status": "Paid", "notes": "Regular salary + sales commission", "paymentId": 1005,
                },
            ],
            "totalPaid": 10700,
            "lastPaymentDate": "2024-02-29",
            "paymentStatus": "Paid",
        },
    ]
    departments = [
        {"id": 1, "name": "Engineering", "employeeCount": 1},
        {"id": 2, "name": "Marketing", "employeeCount": 1},
        {"id": 3, "name": "Sales", "employeeCount": 1},
        {"id": 4, "name": "Human Resources", "employeeCount": 0},
        {"id": 5, "name": "Finance", "employeeCount": 0},
    ]
    return {"employees": employees, "departments": departments}
