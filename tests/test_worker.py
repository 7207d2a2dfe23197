import pytest

from app.features.worker.schemas.worker import Job, WorkerProfile
from app.features.worker.services.worker import filter_jobs, profile_completion

LOCATION = {
    "type": "Point",
    "coordinates": [77.59, 12.97],
    "address": {"city": "Bengaluru", "state": "Karnataka", "pincode": "560001", "fullAddress": "12 MG Road"},
}

JOBS = [
    {
        "_id": "job-1",
        "jobTitle": "Pipe fitting",
        "description": "Fix bathroom pipes",
        "salary": {"amount": 800, "period": "day"},
        "category": "Plumbing",
        "requiredSkills": [{"skill": "Plumbing", "experienceYears": 2}],
        "location": LOCATION,
    },
    {
        "id": "job-2",
        "jobTitle": "House wiring",
        "description": "Rewire a two bedroom flat",
        "category": "Electrical",
    },
]

OFFERS = [
    {"id": "offer-1", "title": "Pipe fitting", "salary": 900, "status": "pending"},
    {"id": "offer-2", "title": "Tiling", "salary": {"amount": 700, "period": "day"}, "status": "accepted"},
    {"id": "offer-3", "title": "Painting", "status": "rejected"},
]


@pytest.fixture
def worker(sign_in):
    return sign_in("worker", token="abc")


def test_login_token_is_sent_with_profile_request(worker, backend):
    backend.on("GET", "/worker/profile", json={"name": "Asha", "phone": "9876543210"})

    response = worker.get("/api/v1/dashboard/profile")

    assert response.status_code == 200
    assert response.json()["data"]["profile"]["name"] == "Asha"
    (call,) = backend.calls_to("GET", "/worker/profile")
    assert call.authorization == "Bearer abc"


def test_signin_calls_carry_no_token(worker, backend):
    for path in ["/auth/send-otp", "/auth/verify-otp", "/auth/login/user"]:
        (call,) = backend.calls_to("POST", path)
        assert call.authorization is None


def test_dashboard_requires_sign_in(client):
    response = client.get("/api/v1/dashboard")

    assert response.status_code == 401
    assert response.json()["message"] == "Please sign in to continue"


def test_dashboard_rejects_other_roles(sign_in):
    client = sign_in("employer")

    response = client.get("/api/v1/dashboard")

    assert response.status_code == 403


def test_dashboard_stats(worker, backend):
    backend.on("GET", "/worker/profile", json={"data": {"name": "Asha", "phone": "9876543210", "skills": ["Plumbing"]}})
    backend.on("GET", "/worker/applications", json={"applications": [{"id": "a1", "jobId": "job-1"}, {"id": "a2"}]})
    backend.on("GET", "/worker/offers", json={"data": OFFERS})

    response = worker.get("/api/v1/dashboard")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["stats"] == {
        "profileCompletion": 50,
        "totalApplications": 2,
        "pendingOffers": 1,
        "acceptedOffers": 1,
    }
    assert data["profile_complete"] is False
    assert [card["name"] for card in data["cards"]] == [
        "Profile Completion", "Total Applications", "Pending Offers", "Accepted Offers",
    ]
    assert data["cards"][0]["value"] == "50%"


def test_expired_token_clears_session(worker, backend):
    backend.on("GET", "/worker/profile", status_code=401, json={"message": "jwt expired"})

    response = worker.get("/api/v1/dashboard/profile")

    assert response.status_code == 401
    assert response.json()["data"]["redirect"] == "/login"
    assert worker.get("/api/v1/session").json()["data"]["authenticated"] is False
    assert worker.get("/api/v1/dashboard/profile").status_code == 401
    assert len(backend.calls_to("GET", "/worker/profile")) == 1


def test_backend_error_message_is_passed_through(worker, backend):
    backend.on("GET", "/worker/jobs", status_code=500, json={"error": "Database unavailable"})

    response = worker.get("/api/v1/dashboard/jobs")

    assert response.status_code == 502
    assert response.json()["message"] == "Database unavailable"


def test_jobs_with_filters(worker, backend):
    backend.on("GET", "/worker/jobs", json={"jobs": JOBS})

    everything = worker.get("/api/v1/dashboard/jobs").json()["data"]
    assert everything["total"] == 2
    assert everything["jobs"][0]["id"] == "job-1"
    assert everything["jobs"][0]["jobTitle"] == "Pipe fitting"

    by_category = worker.get("/api/v1/dashboard/jobs", params={"category": "Electrical"}).json()["data"]
    assert [job["id"] for job in by_category["jobs"]] == ["job-2"]

    by_text = worker.get("/api/v1/dashboard/jobs", params={"q": "BATHROOM", "category": "All"}).json()["data"]
    assert [job["id"] for job in by_text["jobs"]] == ["job-1"]


def test_available_jobs_endpoint(worker, backend):
    backend.on("GET", "/worker/jobs/available", json=[JOBS[1]])

    response = worker.get("/api/v1/dashboard/jobs", params={"available": "true"})

    assert response.json()["data"]["total"] == 1
    assert backend.calls_to("GET", "/worker/jobs") == []


def test_apply_for_job(worker, backend):
    backend.on("POST", "/worker/jobs/job-1/apply", status_code=201, json={"message": "Applied"})

    response = worker.post("/api/v1/dashboard/jobs/job-1/apply")

    assert response.status_code == 200
    assert response.json()["message"] == "Application submitted successfully"
    (call,) = backend.calls_to("POST", "/worker/jobs/job-1/apply")
    assert call.authorization == "Bearer abc"


def test_applications_have_badges(worker, backend):
    backend.on("GET", "/worker/applications", json=[{"id": "a1", "status": "accepted"}])

    data = worker.get("/api/v1/dashboard/applications").json()["data"]

    assert data["applications"][0]["badge"]["label"] == "Accepted"


def test_offers_have_badges(worker, backend):
    backend.on("GET", "/worker/offers", json={"offers": OFFERS})

    offers = worker.get("/api/v1/dashboard/offers").json()["data"]["offers"]

    assert [offer["badge"]["background_color"] for offer in offers] == [
        "bg-yellow-100", "bg-green-100", "bg-red-100",
    ]
    assert offers[1]["salary"] == {"amount": 700.0, "period": "day"}


@pytest.mark.parametrize("action, response_value", [("accept", "accepted"), ("reject", "rejected")])
def test_respond_to_offer(worker, backend, action, response_value):
    backend.on("POST", "/worker/offers/offer-1/respond", json={"success": True})

    response = worker.post(f"/api/v1/dashboard/offers/offer-1/{action}")

    assert response.status_code == 200
    assert response.json()["data"]["status"] == response_value
    (call,) = backend.calls_to("POST", "/worker/offers/offer-1/respond")
    assert call.json == {"response": response_value}


def test_update_profile(worker, backend):
    backend.on("PUT", "/worker/profile", json={"profile": {"name": "Asha K", "phone": "9876543210"}})

    response = worker.put(
        "/api/v1/dashboard/profile",
        json={
            "name": "Asha K",
            "email": "asha@example.com",
            "phone": "9876543210",
            "dateOfBirth": "1995-05-01",
            "gender": "female",
            "skills": ["Plumbing"],
            "experience": [{"title": "Plumber", "company": "City Works", "startDate": "2018-01", "current": True}],
            "education": [],
        },
    )

    assert response.status_code == 200
    (call,) = backend.calls_to("PUT", "/worker/profile")
    assert call.json["experience"][0]["startDate"] == "2018-01"
    assert call.json["dateOfBirth"] == "1995-05-01"


def test_update_profile_validation(worker, backend):
    response = worker.put(
        "/api/v1/dashboard/profile",
        json={
            "name": " ",
            "email": "not-an-email",
            "phone": "123",
            "dateOfBirth": "1995-05-01",
            "gender": "female",
            "skills": [],
        },
    )

    assert response.status_code == 422
    errors = response.json()["data"]["errors"]
    assert errors["name"] == "Name is required"
    assert errors["phone"] == "Please enter a valid 10-digit phone number"
    assert errors["skills"] == "At least one skill is required"
    assert "email" in errors
    assert backend.calls_to("PUT", "/worker/profile") == []


def test_profile_completion():
    assert profile_completion(WorkerProfile()) == 0
    full = WorkerProfile(
        name="Asha", phone="9876543210", email="a@example.com", category="Plumbing",
        skills=["Plumbing"], current_location=LOCATION,
    )
    assert profile_completion(full) == 100


def test_filter_jobs_all_category_keeps_everything():
    jobs = [Job.model_validate(job) for job in JOBS]
    assert filter_jobs(jobs, category="All") == jobs
    assert filter_jobs(jobs, query="  ") == jobs
    assert filter_jobs(jobs, category="Carpentry") == []
