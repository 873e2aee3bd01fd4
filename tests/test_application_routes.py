from bson import ObjectId

from tests.test_apply_routes import form, resume


def test_list_applications_newest_first_with_resume_url(client, seed_jobs):
    job_a, job_b = seed_jobs({"title": "Math Trainer"}, {"title": "Designer"})
    client.post("/api/apply", data=form(jobId=str(job_a), fullName="First"), files=resume())
    client.post("/api/apply", data=form(jobId=str(job_b), fullName="Second"), files=resume())

    body = client.get("/api/applications").json()

    assert body["total"] == 2
    assert {a["fullName"] for a in body["data"]} == {"First", "Second"}
    first = body["data"][0]
    assert first["resumeUrl"].endswith(first["resumePath"])
    assert first["resumePath"].startswith("/uploads/resumes/")

    only_b = client.get(f"/api/applications?jobId={job_b}").json()
    assert [a["fullName"] for a in only_b["data"]] == ["Second"]
    assert only_b["data"][0]["jobId"] == str(job_b)
    assert only_b["data"][0]["jobTitle"] == "Designer"


def test_list_applications_rejects_bad_job_id(client):
    response = client.get("/api/applications?jobId=xyz")

    assert response.status_code == 400


def test_get_application(client):
    created = client.post("/api/apply", data=form(), files=resume()).json()

    response = client.get(f"/api/applications/{created['id']}")

    assert response.status_code == 200
    assert response.json()["email"] == "asha@example.com"
    assert response.json()["comments"] == "I love teaching"
    assert client.get(f"/api/applications/{ObjectId()}").status_code == 404
