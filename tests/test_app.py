from conftest import employee_form, student_form

from vlms.app import LibraryApp, PayrollApp
from vlms.settings_store import Settings


class TestLibraryApp:
    def test_starts_from_sample_data(self, library):
        app = LibraryApp(library)
        assert [s.seat_number for s in app.refresh()] == ["01", "07", "12"]
        assert app.stats()["occupiedSeats"] == 3

    def test_add_student_paid_at_signup(self, library):
        app = LibraryApp(library)
        note = app.save_student(student_form(20, planType="full-time", feesPaid=True, paymentMethod="UPI"))
        assert note.ok
        assert note.message == "Student added successfully!"

        student = app.refresh()[-1]
        assert student.id == 4
        assert student.fees_paid is True
        assert student.total_paid == 800
        assert student.payment_history[0].method == "UPI"
        assert student.study_hours == "09:00 - 21:00"
        assert "20" in app.students.seat_layout().occupied

    def test_non_string_name_is_stored_as_text(self, library):
        app = LibraryApp(library)
        assert app.save_student(student_form(20, name=12345)).ok
        assert app.refresh()[-1].name == "12345"

    def test_validation_errors_block_the_write(self, library):
        app = LibraryApp(library)
        note = app.save_student(student_form(20, name="", email="bad", phone="+91 9876543210"))
        assert note.kind == "error"
        assert note.message == "Please fix the errors in the form"
        assert set(note.errors) == {"name", "email", "phone"}
        assert len(app.refresh()) == 3

    def test_taken_seat_is_a_field_error(self, library):
        app = LibraryApp(library)
        note = app.save_student(student_form(20, seatNumber="07"))
        assert note.errors == {"seatNumber": "Seat is not available"}

    def test_edit_keeps_own_seat_and_clears_flag_only(self, library):
        app = LibraryApp(library)
        rahul = app.students.get(1)
        form = {
            "name": rahul.name,
            "email": rahul.email,
            "phone": rahul.phone,
            "planType": rahul.plan_type,
            "seatNumber": rahul.seat_number,
            "feesPaid": False,
        }
        assert app.save_student(form, editing_id=1).ok
        edited = app.students.get(1)
        assert edited.fees_paid is False
        assert edited.total_paid == 1600
        assert len(edited.payment_history) == 2

    def test_edit_marking_paid_appends_payment(self, library):
        app = LibraryApp(library)
        amit = app.students.get(3)
        form = {
            "name": amit.name,
            "email": amit.email,
            "phone": amit.phone,
            "planType": "full-time",
            "seatNumber": "40",
            "feesPaid": True,
        }
        assert app.save_student(form, editing_id=3).ok
        edited = app.students.get(3)
        assert edited.total_paid == 800
        assert edited.seat_number == "40"
        assert "12" not in app.students.seat_layout().occupied

    def test_edit_unknown_student(self, library):
        app = LibraryApp(library)
        assert app.save_student(student_form(20), editing_id=99).message == "Student not found"

    def test_toggle_fee_payment_asymmetry(self, library):
        app = LibraryApp(library)
        priya = app.students.get(2)
        assert app.toggle_fee_payment(2).message == "Payment recorded successfully!"
        assert app.students.get(2).total_paid == priya.total_paid + 500
        assert app.toggle_fee_payment(2).message == "Payment status updated!"
        after = app.students.get(2)
        assert after.fees_paid is False
        assert after.total_paid == priya.total_paid + 500
        assert not app.toggle_fee_payment(404).ok

    def test_record_payment_rejects_bad_amount(self, library):
        app = LibraryApp(library)
        note = app.record_payment(1, "0")
        assert note.message == "Please enter a valid amount"
        assert app.students.get(1).total_paid == 1600

    def test_delete_student_releases_seat(self, library):
        app = LibraryApp(library)
        assert app.delete_student(2).ok
        assert "07" in app.students.available_seats()
        assert not app.delete_student(2).ok

    def test_timings_drive_study_hours(self, library):
        app = LibraryApp(library)
        bad = app.update_timings(Settings(half_time_start="15:00", half_time_end="10:00"))
        assert bad.message == "Half-time start time must be before end time"

        assert app.update_timings(Settings(half_time_start="10:00", half_time_end="15:00")).ok
        assert library.get("timings")["halfTimeStart"] == "10:00"
        app.save_student(student_form(20))
        assert app.refresh()[-1].study_hours == "10:00 - 15:00"

    def test_custom_student_timing(self, library):
        app = LibraryApp(library)
        assert not app.update_student_timing(1, "18:00", "09:00", True).ok
        assert app.update_student_timing(1, "07:00", "11:00", True).ok
        rahul = app.students.get(1)
        assert (rahul.custom_start_time, rahul.custom_end_time, rahul.use_custom_timing) == ("07:00", "11:00", True)

    def test_actions_are_recorded_in_activity(self, library):
        app = LibraryApp(library)
        app.save_student(student_form(20))
        app.toggle_fee_payment(4)
        app.delete_student(4)
        assert [e.action for e in app.activity()] == ["add_student", "add_payment", "delete_student"]

    def test_import_failure_is_reported(self, library):
        app = LibraryApp(library)
        note = app.import_data("{}")
        assert note.kind == "error"
        assert len(app.refresh()) == 3

    def test_export_then_import(self, library):
        app = LibraryApp(library)
        document = app.export_data()
        assert app.clear().ok
        assert app.refresh() == []
        assert app.import_data(document).ok
        assert len(app.refresh()) == 3


class TestPayrollApp:
    def test_add_employee_counts_department(self, err_logger):
        from vlms.storage import MemoryStorage, payroll_store

        app = PayrollApp(payroll_store(MemoryStorage(), err_logger))
        note = app.save_employee(employee_form(9, department="Finance", email="new@company.com"))
        assert note.ok
        employee = app.refresh()[-1]
        assert employee.employee_id == "EMP004"
        counts = {d.name: d.employee_count for d in app.employees.departments()}
        assert counts["Finance"] == 1
        assert counts["Engineering"] == 1

    def test_save_employee_validation(self, payroll):
        app = PayrollApp(payroll)
        note = app.save_employee(employee_form(1, baseSalary=-5, position=""))
        assert set(note.errors) == {"baseSalary", "position"}

    def test_edit_employee_moves_department(self, payroll):
        app = PayrollApp(payroll)
        app.save_employee(employee_form(1))
        assert app.save_employee(employee_form(1, department="Sales"), editing_id=1).ok
        counts = {d.name: d.employee_count for d in app.employees.departments()}
        assert counts == {"Engineering": 0, "Sales": 1}

    def test_pay_salary(self, payroll):
        app = PayrollApp(payroll)
        app.save_employee(employee_form(1))
        assert app.pay_salary(1, "4000", deductions="400", bonuses="100").ok
        employee = app.employees.get(1)
        assert employee.total_paid == 3700
        assert employee.payment_status == "Paid"
        assert app.pay_salary(1, 4000, deductions="lots").message == "Deductions and bonuses must be numbers"
        assert not app.pay_salary(1, 4000, method="Barter").ok
        assert not app.pay_salary(42, 4000).ok

    def test_delete_and_departments(self, payroll):
        app = PayrollApp(payroll)
        app.save_employee(employee_form(1))
        assert app.add_department("Legal").ok
        assert not app.add_department("Legal").ok
        assert app.delete_employee(1).ok
        assert not app.delete_employee(1).ok
        assert {d.name: d.employee_count for d in app.employees.departments()} == {
            "Engineering": 0,
            "Sales": 0,
            "Legal": 0,
        }

    def test_non_string_name_is_stored_as_text(self, payroll):
        app = PayrollApp(payroll)
        assert app.save_employee(employee_form(1, name=12345)).ok
        assert app.employees.get(1).name == "12345"
