from datetime import date

from vlms.models import SeatLayout, Student
from vlms.repository import EmployeeRepository, StudentRepository
from vlms.settings_store import Settings, SettingsStore, convert_to_12_hour, convert_to_24_hour, display_timing
from vlms.stats import library_stats, payroll_stats
from vlms.storage import MemoryStorage, payroll_store


def test_settings_defaults_and_tolerant_parsing(library):
    store = SettingsStore(library)
    assert store.load() == Settings()
    library.set("timings", {"fullTimeStart": "07:30", "halfTimeEnd": None})
    loaded = store.load()
    assert loaded.full_time_start == "07:30"
    assert loaded.half_time_end == "14:00"


def test_settings_save_round_trip(library):
    store = SettingsStore(library)
    settings = Settings(full_time_start="08:00", full_time_end="22:00")
    assert store.save(settings) == {}
    assert library.get("timings") == {
        "fullTimeStart": "08:00",
        "fullTimeEnd": "22:00",
        "halfTimeStart": "09:00",
        "halfTimeEnd": "14:00",
    }
    assert store.load() == settings


def test_time_conversion():
    assert convert_to_12_hour("00:15") == "12:15 AM"
    assert convert_to_12_hour("12:00") == "12:00 PM"
    assert convert_to_12_hour("21:05") == "9:05 PM"
    assert convert_to_12_hour("") == ""
    assert convert_to_24_hour("9:05 PM") == "21:05"
    assert convert_to_24_hour("12:30 AM") == "00:30"
    assert convert_to_24_hour("12:30 PM") == "12:30"


def test_display_timing():
    settings = Settings()
    full = Student.from_dict({"id": 1, "planType": "full-time"})
    custom = Student.from_dict(
        {"id": 2, "planType": "half-time", "useCustomTiming": True, "customStartTime": "15:00", "customEndTime": "20:00"}
    )
    assert display_timing(full, settings) == "9:00 AM - 9:00 PM"
    assert display_timing(custom, settings) == "3:00 PM - 8:00 PM (Custom)"


def test_seat_layout_helpers():
    layout = SeatLayout(occupied={"01", "02"})
    assert layout.labels()[0] == "01"
    assert layout.labels()[-1] == "80"
    assert len(layout.available()) == 78
    assert "02" in layout.available(current="02")
    assert SeatLayout.from_dict(layout.to_dict()) == layout


def test_library_stats(library):
    library.initialize()
    repo = StudentRepository(library)
    assert library_stats(repo.list(), repo.seat_layout()) == {
        "totalStudents": 3,
        "activeStudents": 3,
        "feesPending": 2,
        "fullTimeStudents": 1,
        "halfTimeStudents": 2,
        "occupiedSeats": 3,
        "totalSeats": 80,
    }


def test_payroll_stats(err_logger):
    store = payroll_store(MemoryStorage(), err_logger)
    store.initialize()
    repo = EmployeeRepository(store)
    stats = payroll_stats(repo.list(), repo.departments(), today=date(2024, 2, 15))
    assert stats == {
        "totalEmployees": 3,
        "activeEmployees": 3,
        "totalDepartments": 5,
        "totalPaid": 25250,
        "totalPayments": 5,
        "thisMonthPaid": 9600,
        "thisMonthPayments": 2,
        "pendingPayments": 1,
        "pendingAmount": 4500,
        "averageSalary": 4500,
    }


def test_department_counts_match_seed(err_logger):
    store = payroll_store(MemoryStorage(), err_logger)
    store.initialize()
    counts = {d.name: d.employee_count for d in EmployeeRepository(store).departments()}
    assert counts == {"Engineering": 1, "Marketing": 1, "Sales": 1, "Human Resources": 0, "Finance": 0}
