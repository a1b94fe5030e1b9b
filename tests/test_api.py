"""HTTP surface, with the store and client placed on app.state."""

import json

import httpx
import pytest

from anlik_eleman.api.app import app
from anlik_eleman.api.limiter import limiter
from anlik_eleman.api.routes import messages as message_routes
from anlik_eleman.auth.store import EMAIL_REQUIRED
from anlik_eleman.db import messages
from anlik_eleman.db.base import Result
from anlik_eleman.db.rows import Profile

from conftest import FakeGateway, job_seeker_metadata, json_response, make_identity, session_body


def unreachable(request):
    return json_response(500, {"message": "unexpected request"})


@pytest.fixture
async def api(make_store, platform):
    """Serve the app for one signed-out or signed-in user."""
    limiter.reset()
    clients: list[httpx.AsyncClient] = []

    async def factory(gateway: FakeGateway, handler=unreachable) -> httpx.AsyncClient:
        store = make_store(gateway)
        await store.init()
        app.state.store = store
        app.state.client = platform(handler)
        http = httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://localhost")
        clients.append(http)
        return http

    yield factory
    for http in clients:
        await http.aclose()


def seeker(**fields) -> Profile:
    return Profile(id="user-1", user_type="job_seeker", first_name="Ayşe", city="İzmir", **fields)


async def test_health(api):
    http = await api(FakeGateway(make_identity()))

    response = await http.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


async def test_state_when_signed_out(api):
    http = await api(FakeGateway(make_identity()))

    body = (await http.get("/auth/state")).json()

    assert body["phase"] == "anonymous"
    assert body["is_authenticated"] is False
    assert body["profile"] is None


async def test_sign_in_validation_error(api):
    http = await api(FakeGateway(make_identity()))

    response = await http.post("/auth/sign-in", json={"email": "", "password": "secret123"})

    assert response.status_code == 400
    assert response.json()["detail"] == EMAIL_REQUIRED


async def test_sign_in_loads_profile(api):
    http = await api(FakeGateway(make_identity(), profiles={"user-1": seeker()}))

    response = await http.post("/auth/sign-in", json={"email": "ayse@example.com", "password": "secret123"})

    assert response.status_code == 200
    body = response.json()
    assert body["phase"] == "ready"
    assert body["profile"]["city"] == "İzmir"


async def test_sign_in_is_rate_limited(api):
    http = await api(FakeGateway(make_identity()))

    statuses = [
        (await http.post("/auth/sign-in", json={"email": "", "password": "x"})).status_code
        for _ in range(6)
    ]

    assert statuses[:5] == [400] * 5
    assert statuses[5] == 429


async def test_sign_up_awaiting_confirmation(api):
    http = await api(FakeGateway(make_identity(metadata=job_seeker_metadata(), confirmed=False)))

    response = await http.post(
        "/auth/sign-up",
        json={"email": "ayse@example.com", "password": "secret123", "first_name": "Ayşe", "last_name": "Yılmaz"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["email_confirmed"] is False
    assert body["state"]["phase"] == "anonymous"


async def test_update_profile_returns_reloaded_state(api):
    http = await api(FakeGateway(make_identity(), signed_in=True, profiles={"user-1": seeker()}))

    response = await http.patch("/auth/profile", json={"city": "Bursa"})

    assert response.status_code == 200
    assert response.json()["profile"]["city"] == "Bursa"


async def test_update_profile_requires_user(api):
    http = await api(FakeGateway(make_identity()))

    response = await http.patch("/auth/profile", json={"city": "Bursa"})

    assert response.status_code == 401
    assert response.json()["detail"] == messages.NO_ACTIVE_USER


async def test_sign_out_failure_keeps_user(api):
    gateway = FakeGateway(make_identity(), signed_in=True, profiles={"user-1": seeker()})
    gateway.sign_out_error = Result.failure(messages.SIGNOUT_UNEXPECTED)
    http = await api(gateway)

    response = await http.post("/auth/sign-out")

    assert response.status_code == 400
    state = (await http.get("/auth/state")).json()
    assert state["is_authenticated"] is True
    assert state["error"] == messages.SIGNOUT_FAILED


async def test_favorites_require_sign_in(api):
    http = await api(FakeGateway(make_identity()))

    response = await http.get("/favorites")

    assert response.status_code == 401


async def test_job_seeker_cannot_post_jobs(api):
    http = await api(FakeGateway(make_identity(), signed_in=True, profiles={"user-1": seeker()}))

    response = await http.post(
        "/jobs",
        json={"category_id": "cat-1", "title": "Garson", "description": "Akşam", "city": "İzmir"},
    )

    assert response.status_code == 403


async def test_missing_job_is_404(api):
    http = await api(
        FakeGateway(make_identity()),
        handler=lambda request: json_response(406, {"code": "PGRST116", "message": "no rows"}),
    )

    response = await http.get("/jobs/job-404")

    assert response.status_code == 404


async def test_job_list_filters(api):
    requests = []

    def handler(request):
        requests.append(request)
        return json_response(200, [{"id": "job-1", "title": "Kurye", "city": "Ankara"}])

    http = await api(FakeGateway(make_identity()), handler=handler)

    response = await http.get("/jobs", params={"city": "Ankara", "limit": 5})

    assert response.status_code == 200
    assert response.json()[0]["title"] == "Kurye"
    assert requests[0].url.params["city"] == "eq.Ankara"
    assert requests[0].url.params["limit"] == "5"


async def test_requests_for_other_hosts_are_rejected(api):
    http = await api(FakeGateway(make_identity()))

    response = await http.get("/health", headers={"host": "anlik-eleman.example.com"})

    assert response.status_code == 400


# ============== Email verification ==============


async def test_verify_email_sends_token(api):
    def handler(request):
        assert request.url.path == "/auth/v1/verify"
        return json_response(200, session_body())

    http = await api(FakeGateway(make_identity()), handler=handler)

    response = await http.post("/auth/verify-email", json={"token_hash": "hash-1"})

    assert response.status_code == 200
    assert json.loads(app.state.client.requests[0].content) == {"type": "email", "token_hash": "hash-1"}


async def test_verify_email_failure(api):
    http = await api(
        FakeGateway(make_identity()),
        handler=lambda request: json_response(403, {"msg": "Token has expired or is invalid"}),
    )

    response = await http.post("/auth/verify-email", json={"token_hash": "expired"})

    assert response.status_code == 400
    assert response.json()["detail"].startswith(messages.VERIFY_EMAIL_FAILED)


# ============== Reviews ==============


async def test_list_reviews_of_user(api):
    requests = []

    def handler(request):
        requests.append(request)
        return json_response(200, [{"id": "rev-1", "reviewee_id": "user-2", "rating": 5}])

    http = await api(FakeGateway(make_identity()), handler=handler)

    response = await http.get("/reviews/user-2")

    assert response.status_code == 200
    assert response.json()[0]["rating"] == 5
    assert requests[0].url.params["reviewee_id"] == "eq.user-2"
    assert requests[0].url.params["is_public"] == "eq.true"


async def test_create_review_as_signed_in_user(api):
    def handler(request):
        return json_response(201, {"id": "rev-1", **json.loads(request.content)})

    http = await api(
        FakeGateway(make_identity(), signed_in=True, profiles={"user-1": seeker()}), handler=handler
    )

    response = await http.post("/reviews", json={"reviewee_id": "user-2", "rating": 4, "comment": "Dakik"})

    assert response.status_code == 200
    body = response.json()
    assert body["reviewer_id"] == "user-1"
    assert body["rating"] == 4


async def test_cannot_review_yourself(api):
    http = await api(FakeGateway(make_identity(), signed_in=True, profiles={"user-1": seeker()}))

    response = await http.post("/reviews", json={"reviewee_id": "user-1", "rating": 5})

    assert response.status_code == 400


# ============== Applications ==============


def application_handler(notification_status: int = 201):
    requests = []

    def handler(request):
        requests.append(request)
        path = request.url.path
        if path == "/rest/v1/applications":
            return json_response(201, {"id": "app-1", **json.loads(request.content)})
        if path == "/rest/v1/job_postings":
            return json_response(200, {"id": "job-1", "title": "Garson", "employer_id": "emp-1"})
        if path == "/rest/v1/notifications":
            if notification_status >= 400:
                return json_response(notification_status, {"message": "insert failed"})
            return json_response(notification_status, {"id": "n-1", **json.loads(request.content)})
        return json_response(404, {"message": "not found"})

    return requests, handler


async def test_application_notifies_employer(api):
    requests, handler = application_handler()
    http = await api(
        FakeGateway(make_identity(), signed_in=True, profiles={"user-1": seeker(last_name="Yılmaz")}),
        handler=handler,
    )

    response = await http.post("/applications", json={"job_id": "job-1"})

    assert response.status_code == 200
    assert response.json()["status"] == "pending"
    notification = json.loads(
        next(r for r in requests if r.url.path == "/rest/v1/notifications").content
    )
    assert notification["user_id"] == "emp-1"
    assert notification["type"] == "application"
    assert "Garson" in notification["message"]
    assert notification["data"] == {"job_id": "job-1", "application_id": "app-1"}


async def test_application_survives_failed_notification(api):
    _, handler = application_handler(notification_status=500)
    http = await api(
        FakeGateway(make_identity(), signed_in=True, profiles={"user-1": seeker()}), handler=handler
    )

    response = await http.post("/applications", json={"job_id": "job-1"})

    assert response.status_code == 200
    assert response.json()["id"] == "app-1"


# ============== Message attachments ==============


async def test_attachment_is_uploaded_and_sent(api):
    requests = []

    def handler(request):
        requests.append(request)
        if request.url.path.startswith("/storage/v1/object/uploads/messages/"):
            return json_response(200, {"Key": request.url.path.removeprefix("/storage/v1/object/")})
        if request.url.path == "/rest/v1/messages":
            return json_response(201, {"id": "msg-1", **json.loads(request.content)})
        return json_response(404, {"message": "not found"})

    http = await api(
        FakeGateway(make_identity(), signed_in=True, profiles={"user-1": seeker()}), handler=handler
    )

    response = await http.post(
        "/messages/conversations/conv-1/attachments",
        params={"file_name": "cv.pdf"},
        content=b"%PDF",
        headers={"content-type": "application/pdf"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["message_type"] == "file"
    assert body["file_name"] == "cv.pdf"
    assert body["file_size"] == 4
    assert body["file_url"].startswith(
        "https://example.supabase.co/storage/v1/object/public/uploads/messages/"
    )
    assert body["file_url"].endswith(".pdf")
    upload = requests[0]
    assert upload.headers["content-type"] == "application/pdf"
    assert upload.content == b"%PDF"


async def test_oversized_attachment_is_rejected(api, monkeypatch):
    monkeypatch.setattr(message_routes, "MAX_ATTACHMENT_BYTES", 3)
    http = await api(FakeGateway(make_identity(), signed_in=True, profiles={"user-1": seeker()}))

    response = await http.post(
        "/messages/conversations/conv-1/attachments",
        params={"file_name": "foto.jpg"},
        content=b"1234",
        headers={"content-type": "image/jpeg"},
    )

    assert response.status_code == 413
    assert response.json()["detail"] == message_routes.ATTACHMENT_TOO_LARGE


# ============== Admin ==============


async def test_admin_lists_recent_users(api):
    requests = []

    def handler(request):
        requests.append(request)
        return json_response(200, [{"id": "user-9", "user_type": "employer", "first_name": "Can"}])

    admin = Profile(id="user-1", user_type="admin", first_name="Yönetici")
    http = await api(
        FakeGateway(make_identity(), signed_in=True, profiles={"user-1": admin}), handler=handler
    )

    response = await http.get("/dashboard/users", params={"limit": 5})

    assert response.status_code == 200
    assert response.json()[0]["id"] == "user-9"
    assert requests[0].url.params["order"] == "created_at.desc"
    assert requests[0].url.params["limit"] == "5"


async def test_recent_users_require_admin(api):
    http = await api(FakeGateway(make_identity(), signed_in=True, profiles={"user-1": seeker()}))

    response = await http.get("/dashboard/users")

    assert response.status_code == 403
