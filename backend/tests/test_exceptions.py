import pytest

from timetabler.core.exceptions import AppError, ConfigurationError, ResourceNotFoundError
from timetabler.schemas.generator import SubjectIn, TimetableConfig
from timetabler.services.timetable_generator import TimetableGenerator


def test_app_error_defaults_to_server_error():
    err = AppError("Generic error")
    assert err.status_code == 500
    assert err.details == {}
    assert str(err) == "Generic error"


def test_missing_resource_carries_lookup_details():
    missing = ResourceNotFoundError("Approved timetable", "abc")
    assert missing.status_code == 404
    assert missing.message == "Approved timetable with id abc not found"
    assert missing.details == {"resource_type": "Approved timetable", "resource_id": "abc"}


def test_empty_faculty_pool_is_a_configuration_error():
    config = TimetableConfig(subjects=[SubjectIn(id="m", name="Mathematics", sessions_per_week=2)])
    with pytest.raises(ConfigurationError) as excinfo:
        TimetableGenerator(config, faculty_pool=())
    assert excinfo.value.status_code == 500
    assert isinstance(excinfo.value, AppError)


def test_app_errors_render_message_and_details(client):
    response = client.get("/api/timetables/approved/unknown/grid")
    assert response.status_code == 404
    assert response.json() == {
        "message": "Approved timetable with id unknown not found",
        "details": {"resource_type": "Approved timetable", "resource_id": "unknown"},
    }
