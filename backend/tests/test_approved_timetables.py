def _generate_candidate(client) -> dict:
    response = client.post(
        "/api/timetable/generate",
        json={
            "config": {
                "name": "ECE Semester 5",
                "department": "ECE",
                "semester": "5",
                "subjects": [{"id": "sig", "name": "Signals", "sessions_per_week": 3}],
            },
            "settings_override": {"random_seed": 12},
        },
    )
    assert response.status_code == 200
    return response.json()["candidates"][0]


def _approve(client, candidate: dict, name: str = "ECE Semester 5") -> dict:
    response = client.post(
        "/api/timetables/approved",
        json={
            "timetable": candidate,
            "config": {"name": name, "department": "ECE", "semester": "5"},
        },
    )
    assert response.status_code == 201
    return response.json()


def test_approve_and_list_timetables(client):
    candidate = _generate_candidate(client)
    approved = _approve(client, candidate)

    assert approved["status"] == "approved"
    assert approved["config"]["department"] == "ECE"
    assert approved["timetable"]["name"] == candidate["name"]
    assert approved["timetable"]["schedule"] == candidate["schedule"]
    assert approved["approved_at"]

    listing = client.get("/api/timetables/approved")
    assert listing.status_code == 200
    assert [item["id"] for item in listing.json()] == [approved["id"]]

    fetched = client.get(f"/api/timetables/approved/{approved['id']}")
    assert fetched.status_code == 200
    assert fetched.json()["timetable"]["score"] == candidate["score"]


def test_each_approval_gets_its_own_id(client):
    candidate = _generate_candidate(client)
    first = _approve(client, candidate, name="First")
    second = _approve(client, candidate, name="Second")
    assert first["id"] != second["id"]
    assert len(client.get("/api/timetables/approved").json()) == 2


def test_approved_grid_layout(client):
    candidate = _generate_candidate(client)
    approved = _approve(client, candidate)

    response = client.get(f"/api/timetables/approved/{approved['id']}/grid")
    assert response.status_code == 200
    body = response.json()
    assert body["name"] == "ECE Semester 5"
    assert body["days"] == ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"]
    assert "13:00 - 14:00" in body["time_slots"]
    for day in body["days"]:
        assert body["grid"][day]["13:00 - 14:00"]["type"] == "lunch"


def test_delete_approved_timetable(client):
    approved = _approve(client, _generate_candidate(client))

    deleted = client.delete(f"/api/timetables/approved/{approved['id']}")
    assert deleted.status_code == 204
    assert client.get("/api/timetables/approved").json() == []


def test_missing_approved_timetable_returns_404(client):
    response = client.get("/api/timetables/approved/does-not-exist")
    assert response.status_code == 404
    body = response.json()
    assert "not found" in body["message"]
    assert body["details"]["resource_id"] == "does-not-exist"

    deleted = client.delete("/api/timetables/approved/does-not-exist")
    assert deleted.status_code == 404


def test_overlong_candidate_name_is_rejected(client):
    candidate = _generate_candidate(client)
    candidate["name"] = "x" * 101

    response = client.post(
        "/api/timetables/approved",
        json={"timetable": candidate, "config": {"name": "ECE Semester 5"}},
    )
    assert response.status_code == 422
    assert client.get("/api/timetables/approved").json() == []
