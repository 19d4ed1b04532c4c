import json

from vlms.logger import AppEvent
from vlms.storage import JsonFileStorage, MemoryStorage, library_store, payroll_store


def test_get_absent_returns_empty_defaults(library):
    assert library.get("students") == []
    assert library.get("timings") is None
    assert library.get("timings", {"a": "b"}) == {"a": "b"}


def test_set_then_get(library):
    assert library.set("students", [{"id": 1}]) is True
    assert library.get("students") == [{"id": 1}]
    assert library.backend.get_item("library_students") == json.dumps([{"id": 1}])


def test_get_fails_soft_on_corrupt_value(library, err_logger):
    library.backend.set_item("library_students", "{not json")
    assert library.get("students") == []
    assert "store.get: students" in err_logger.path.read_text(encoding="utf-8")


def test_set_returns_false_when_quota_exceeded(err_logger):
    store = library_store(MemoryStorage(quota_bytes=10), err_logger)
    assert store.set("students", [{"id": 1}]) is False
    assert store.get("students") == []
    assert "StorageFullError" in err_logger.path.read_text(encoding="utf-8")


def test_set_returns_false_for_unserializable_value(library):
    assert library.set("students", [object()]) is False


def test_initialize_seeds_library_once(library):
    assert library.initialize() is True
    students = library.get("students")
    assert [s["name"] for s in students] == ["Rahul Sharma", "Priya Verma", "Amit Kumar"]
    assert library.get("seat_layout") == {"total": 80, "occupied": ["01", "07", "12"]}

    library.set("students", [])
    assert library.initialize() is False
    assert library.get("students") == []


def test_initialize_seeds_payroll_with_departments(err_logger):
    store = payroll_store(MemoryStorage(), err_logger)
    store.initialize()
    assert [e["employeeId"] for e in store.get("employees")] == ["EMP001", "EMP002", "EMP003"]
    assert [d["name"] for d in store.get("departments")] == [
        "Engineering",
        "Marketing",
        "Sales",
        "Human Resources",
        "Finance",
    ]


def test_clear_removes_every_namespaced_key(library):
    library.initialize()
    library.set("timings", {"fullTimeStart": "08:00"})
    library.backend.set_item("unrelated", "1")
    assert library.clear() is True
    assert library.backend.keys() == ["unrelated"]


def test_json_file_storage_persists_between_instances(tmp_path, err_logger):
    path = tmp_path / "data" / "store.json"
    store = library_store(JsonFileStorage(path), err_logger)
    store.set("students", [{"id": 7}])

    reopened = library_store(JsonFileStorage(path), err_logger)
    assert reopened.get("students") == [{"id": 7}]

    reopened.remove("students")
    assert library_store(JsonFileStorage(path), err_logger).has("students") is False


def test_activity_events_are_appended_and_limited(library):
    for i in range(3):
        library.add_event(AppEvent(timestamp=f"t{i}", action="add_student", entity_type="student", entity_id=str(i)))
    events = library.list_events(limit=2)
    assert [e.entity_id for e in events] == ["1", "2"]
    assert library.get("activity")[0]["entityType"] == "student"


def test_activity_recovers_from_non_list_value(library):
    library.set("activity", {"bad": 1})
    assert library.list_events() == []
    event = AppEvent(timestamp="t0", action="add_student", entity_type="student", entity_id="1")
    assert library.add_event(event) is True
    assert [e.entity_id for e in library.list_events()] == ["1"]
