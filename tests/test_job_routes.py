from bson import ObjectId
from pymongo.errors import OperationFailure

from app.services.mongo_service import JobService
from tests.conftest import job_payload


def test_create_job_returns_normalized_job(client, db):
    response = client.post("/api/jobs", json=job_payload(description="<script>x</script>Ship it"))

    assert response.status_code == 201
    body = response.json()
    assert ObjectId.is_valid(body["id"])
    assert body["type"] == "Full-time"
    assert body["status"] == "Open"
    assert body["description"] == "xShip it"
    assert body["tags"] == ["Backend", "Python", "MongoDB"]
    assert body["skills"] == body["tags"]
    assert body["applications"] == 0
    assert "createdAt" in body and "_id" not in body
    assert db["jobs"].count_documents({}) == 1


def test_create_job_validation_error_is_400_with_field_errors(client):
    response = client.post("/api/jobs", json=job_payload(department="Finance", title=""))

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Validation Error"
    assert set(body["errors"]) == {"department", "title"}


def test_get_job(client):
    job_id = client.post("/api/jobs", json=job_payload()).json()["id"]

    response = client.get(f"/api/jobs/{job_id}")

    assert response.status_code == 200
    assert response.json()["title"] == "Backend Engineer"


def test_get_job_not_found_and_invalid_id(client):
    missing = client.get(f"/api/jobs/{ObjectId()}")
    assert missing.status_code == 404
    assert missing.json() == {"success": False, "message": "Job not found"}

    invalid = client.get("/api/jobs/not-an-id")
    assert invalid.status_code == 400
    assert invalid.json()["message"] == 'Invalid id: "not-an-id"'


def test_list_jobs_newest_first_with_filters(client, seed_jobs):
    seed_jobs(
        {"title": "Old intern", "type": "Internship"},
        {"title": "Closed role", "status": "Closed"},
        {"title": "Researcher", "department": "Research"},
    )

    everything = client.get("/api/jobs").json()
    assert [j["title"] for j in everything["data"]] == ["Researcher", "Closed role", "Old intern"]
    assert everything["total"] == 3

    assert [j["title"] for j in client.get("/api/jobs?type=Internship").json()["data"]] == ["Old intern"]
    assert [j["title"] for j in client.get("/api/jobs?status=Closed").json()["data"]] == ["Closed role"]
    assert [j["title"] for j in client.get("/api/jobs?department=Research").json()["data"]] == ["Researcher"]


def test_list_jobs_pagination(client, seed_jobs):
    seed_jobs({"title": "A"}, {"title": "B"}, {"title": "C"})

    body = client.get("/api/jobs?page=2&limit=2").json()

    assert [j["title"] for j in body["data"]] == ["A"]
    assert body["total"] == 3
    assert body["page"] == 2
    assert body["limit"] == 2
    assert body["pages"] == 2


def test_list_jobs_without_limit_returns_every_job(client, seed_jobs):
    seed_jobs(*({"title": f"Job {i}"} for i in range(60)))

    everything = client.get("/api/jobs").json()
    assert len(everything["data"]) == 60
    assert everything["total"] == 60
    assert everything["page"] == 1
    assert everything["pages"] == 1
    assert everything["data"][0]["title"] == "Job 59"

    first_page = client.get("/api/jobs?limit=50").json()
    assert len(first_page["data"]) == 50
    assert first_page["pages"] == 2


def test_list_jobs_includes_legacy_documents(client, db, seed_jobs):
    seed_jobs({"title": "Current"})
    db["jobs"].insert_one({"title": "Legacy", "tags": ["A"], "status": None})

    response = client.get("/api/jobs")

    assert response.status_code == 200
    legacy = next(j for j in response.json()["data"] if j["title"] == "Legacy")
    assert legacy["department"] is None
    assert legacy["type"] is None
    assert legacy["location"] is None
    assert legacy["status"] == "Open"
    assert client.get(f"/api/jobs/{legacy['id']}").status_code == 200


def test_timestamps_are_utc(client):
    created = client.post("/api/jobs", json=job_payload()).json()
    fetched = client.get(f"/api/jobs/{created['id']}").json()

    for value in (created["createdAt"], fetched["createdAt"], fetched["updatedAt"]):
        assert value.endswith(("Z", "+00:00"))


def test_blank_status_defaults_to_open_on_create_and_is_ignored_on_update(client):
    created = client.post("/api/jobs", json=job_payload(status=""))
    assert created.status_code == 201
    assert created.json()["status"] == "Open"

    updated = client.patch(f"/api/jobs/{created.json()['id']}", json={"status": " ", "title": "Renamed"})
    assert updated.status_code == 200
    assert updated.json()["status"] == "Open"
    assert updated.json()["title"] == "Renamed"


def test_list_jobs_rejects_bad_pagination(client):
    response = client.get("/api/jobs?page=0")
    assert response.status_code == 400
    assert "page" in response.json()["errors"]


def test_public_jobs_only_returns_open(client, seed_jobs):
    seed_jobs({"title": "Open role"}, {"title": "Closed role", "status": "Closed"})

    body = client.get("/api/jobs/public?status=Closed").json()

    assert [j["title"] for j in body["data"]] == ["Open role"]


def test_search_uses_case_insensitive_regex(client, seed_jobs):
    seed_jobs(
        {"title": "Data Scientist"},
        {"title": "Frontend Developer", "overview": "React and data viz"},
        {"title": "Trainer (C++)"},
    )

    titles = [j["title"] for j in client.get("/api/jobs?q=DATA").json()["data"]]
    assert sorted(titles) == ["Data Scientist", "Frontend Developer"]

    # regex metacharacters are matched literally
    titles = [j["title"] for j in client.get("/api/jobs", params={"q": "C++"}).json()["data"]]
    assert titles == ["Trainer (C++)"]


def test_search_falls_back_to_regex_without_text_index(client, settings, seed_jobs, monkeypatch):
    seed_jobs({"title": "Data Scientist"}, {"title": "Trainer"})
    monkeypatch.setattr(settings, "text_search_enabled", True)

    def no_text_index(self, *args, **kwargs):
        raise OperationFailure("text index required for $text query")

    monkeypatch.setattr(JobService, "_text_search", no_text_index)

    body = client.get("/api/jobs?q=scientist").json()

    assert [j["title"] for j in body["data"]] == ["Data Scientist"]
    assert body["total"] == 1


def test_patch_and_put_update_only_sent_fields(client):
    job_id = client.post("/api/jobs", json=job_payload()).json()["id"]

    patched = client.patch(f"/api/jobs/{job_id}", json={"location": "Pune", "title": None})
    assert patched.status_code == 200
    assert patched.json()["location"] == "Pune"
    assert patched.json()["title"] == "Backend Engineer"
    assert patched.json()["tags"] == ["Backend", "Python", "MongoDB"]

    put = client.put(f"/api/jobs/{job_id}", json={"requiredSkills": "Go\nRust"})
    assert put.status_code == 200
    assert put.json()["requiredSkills"] == ["Go", "Rust"]
    assert put.json()["tags"] == ["Go", "Rust"]
    assert put.json()["skills"] == ["Go", "Rust"]


def test_update_errors(client):
    job_id = client.post("/api/jobs", json=job_payload()).json()["id"]

    empty = client.patch(f"/api/jobs/{job_id}", json={"overview": None})
    assert empty.status_code == 400
    assert empty.json()["message"] == "No valid fields provided to update."

    bad_enum = client.patch(f"/api/jobs/{job_id}", json={"type": "Freelance"})
    assert bad_enum.status_code == 400

    missing = client.patch(f"/api/jobs/{ObjectId()}", json={"title": "X"})
    assert missing.status_code == 404


def test_set_job_status(client):
    job_id = client.post("/api/jobs", json=job_payload()).json()["id"]

    closed = client.patch(f"/api/jobs/{job_id}/status", json={"status": "Closed"})
    assert closed.status_code == 200
    assert closed.json()["status"] == "Closed"

    required = client.patch(f"/api/jobs/{job_id}/status", json={})
    assert required.status_code == 400
    assert required.json()["message"] == "Status is required"

    invalid = client.patch(f"/api/jobs/{job_id}/status", json={"status": "Paused"})
    assert invalid.status_code == 400

    missing = client.patch(f"/api/jobs/{ObjectId()}/status", json={"status": "Open"})
    assert missing.status_code == 404


def test_delete_job(client):
    job_id = client.post("/api/jobs", json=job_payload()).json()["id"]

    deleted = client.delete(f"/api/jobs/{job_id}")
    assert deleted.status_code == 200
    assert deleted.json() == {"message": "Job deleted successfully", "success": True}

    assert client.delete(f"/api/jobs/{job_id}").status_code == 404
    assert client.get(f"/api/jobs/{job_id}").status_code == 404


def test_unknown_route_returns_json_404(client):
    response = client.get("/api/nothing-here")

    assert response.status_code == 404
    assert response.json() == {"success": False, "message": "Route not found: /api/nothing-here"}
