import pytest

from vlms.errors import StorageFullError
from vlms.logger import ErrorLogger
from vlms.repository import EmployeeRepository, StudentRepository
from vlms.storage import MemoryStorage, library_store, payroll_store


class FlakyStorage(MemoryStorage):
    """MemoryStorage that refuses writes to the keys listed in `fail_keys`."""

    def __init__(self):
        super().__init__()
        self.fail_keys: set[str] = set()

    def set_item(self, key, value):
        if key in self.fail_keys:
            raise StorageFullError(f"refusing to write {key}")
        super().set_item(key, value)


@pytest.fixture
def err_logger(tmp_path):
    return ErrorLogger(tmp_path / "error_log.txt")


@pytest.fixture
def flaky():
    return FlakyStorage()


@pytest.fixture
def library(err_logger):
    return library_store(MemoryStorage(), err_logger)


@pytest.fixture
def payroll(err_logger):
    store = payroll_store(MemoryStorage(), err_logger)
    store.set("employees", [])
    store.set(
        "departments",
        [
            {"id": 1, "name": "Engineering", "employeeCount": 0},
            {"id": 2, "name": "Sales", "employeeCount": 0},
        ],
    )
    return store


@pytest.fixture
def students(library):
    return StudentRepository(library)


@pytest.fixture
def employees(payroll):
    return EmployeeRepository(payroll)


def student_form(n=1, **overrides):
    form = {
        "name": f"Student {n}",
        "email": f"student{n}@example.com",
        "phone": f"+91 98765{n:05d}",
        "planType": "half-time",
        "seatNumber": f"{n:02d}",
    }
    form.update(overrides)
    return form


def employee_form(n=1, **overrides):
    form = {
        "name": f"Employee {n}",
        "email": f"employee{n}@company.com",
        "phone": f"+1 555-01{n:02d}",
        "department": "Engineering",
        "position": "Developer",
        "baseSalary": 4000,
    }
    form.update(overrides)
    return form
