def _config_payload(**extra) -> dict:
    payload = {
        "name": "CSE Semester 3",
        "department": "CSE",
        "semester": "3",
        "subjects": [
            {"id": "math", "name": "Mathematics", "sessions_per_week": 4, "priority": "high"},
            {"id": "phys", "name": "Physics", "sessions_per_week": 3, "type": "lab"},
        ],
    }
    payload.update(extra)
    return payload


def test_generation_settings_defaults(client):
    response = client.get("/api/timetable/generation-settings")
    assert response.status_code == 200
    body = response.json()
    assert body["attempt_budget"] == 50
    assert body["break_probability"] == 0.5
    assert body["random_seed"] is None


def test_generate_returns_three_candidates(client):
    response = client.post(
        "/api/timetable/generate",
        json={"config": _config_payload(), "settings_override": {"random_seed": 7}},
    )
    assert response.status_code == 200
    body = response.json()

    assert [item["name"] for item in body["candidates"]] == [
        "Optimal Schedule",
        "Balanced Schedule",
        "Flexible Schedule",
    ]
    assert body["days"] == ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"]
    assert len(body["time_slots"]) == 8
    assert "13:00 - 14:00" in body["time_slots"]
    assert body["settings_used"]["random_seed"] == 7
    assert body["runtime_ms"] >= 0

    for candidate in body["candidates"]:
        assert sum(1 for session in candidate["schedule"] if session["type"] == "lunch") == 5
        assert all(session["type"] for session in candidate["schedule"])
        assert 0 <= candidate["score"] <= 100


def test_generate_is_reproducible_with_seed(client):
    request = {"config": _config_payload(), "settings_override": {"random_seed": 99}}
    first = client.post("/api/timetable/generate", json=request).json()
    second = client.post("/api/timetable/generate", json=request).json()
    assert first["candidates"] == second["candidates"]


def test_generate_reports_shortfall_warnings(client):
    response = client.post(
        "/api/timetable/generate",
        json={
            "config": _config_payload(),
            "settings_override": {"random_seed": 1, "attempt_budget": 1},
        },
    )
    assert response.status_code == 200
    body = response.json()
    assert body["warnings"]
    for candidate in body["candidates"]:
        assert candidate["shortfalls"]
        for notice in candidate["shortfalls"]:
            assert notice["missing"] == notice["required"] - notice["achieved"]
            assert notice["subject_id"] in {"math", "phys"}


def test_generate_with_empty_rooms_and_days(client):
    response = client.post(
        "/api/timetable/generate",
        json={
            "config": _config_payload(available_classrooms=[], working_days=[]),
            "settings_override": {"random_seed": 3},
        },
    )
    assert response.status_code == 200
    assert len(response.json()["days"]) == 5


def test_generate_rejects_invalid_times(client):
    response = client.post(
        "/api/timetable/generate",
        json={"config": _config_payload(start_time="25:00")},
    )
    assert response.status_code == 422


def test_generate_rejects_invalid_lunch(client):
    response = client.post(
        "/api/timetable/generate",
        json={"config": _config_payload(lunch_time="14:00 - 13:00")},
    )
    assert response.status_code == 422
