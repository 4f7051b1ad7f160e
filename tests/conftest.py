"""
Shared fixtures. The environment is set before the application is imported
so the engine, uploads directory and bootstrap admin use test values.
"""
import os
import re
import tempfile

import pytest

_TMP_DIR = tempfile.mkdtemp(prefix="civic-reports-tests-")

os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TMP_DIR}/test.db"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["UPLOADS_PATH"] = os.path.join(_TMP_DIR, "uploads")
os.environ["BOOTSTRAP_ADMIN_EMAIL"] = "super@example.com"
os.environ["BOOTSTRAP_ADMIN_PASSWORD"] = "super-secret-pw"
os.environ["BOOTSTRAP_ADMIN_NAME"] = "Super Admin"
os.environ["EMAIL_PROVIDER"] = "resend"
os.environ["RESEND_API_KEY"] = ""

from fastapi.testclient import TestClient  # noqa: E402

from civic_reports.main import app  # noqa: E402

SUPER_ADMIN = {"email": "super@example.com", "password": "super-secret-pw"}


@pytest.fixture(scope="session")
def client():
    """One client for the whole run, so the app and its engine share a loop."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture(autouse=True)
def fresh_cookies(client):
    """Each test starts signed out with default preferences."""
    client.cookies.clear()
    yield
    client.cookies.clear()
    app.dependency_overrides = {}


@pytest.fixture
def login(client):
    """Sign the client in through the JSON API."""

    def _login(email=SUPER_ADMIN["email"], password=SUPER_ADMIN["password"]):
        response = client.post("/api/auth/login", json={"email": email, "password": password})
        assert response.status_code == 200, response.text
        return response.json()

    return _login


@pytest.fixture
def super_admin(login):
    return login()


@pytest.fixture
def html_login(client):
    """Sign the client in through the HTML login form."""

    def _login(email=SUPER_ADMIN["email"], password=SUPER_ADMIN["password"]):
        response = client.post("/login", data={"email": email, "password": password}, follow_redirects=False)
        assert response.status_code == 303, response.text
        assert response.headers["location"] == "/admin"

    return _login


@pytest.fixture
def solve_captcha():
    """Read the challenge out of a rendered report form and answer it."""

    def _solve(html: str) -> dict:
        question = re.search(r"(\d+) \+ (\d+) = \?", html)
        token = re.search(r'name="captcha_token" value="([^"]+)"', html)
        assert question and token
        return {
            "captcha_token": token.group(1),
            "captcha_answer": str(int(question.group(1)) + int(question.group(2))),
        }

    return _solve


@pytest.fixture
def captcha(client):
    """A valid captcha token/answer pair issued by the API."""
    challenge = client.get("/api/public/captcha").json()
    first, second = challenge["question"].split(" + ")
    return {"captcha_token": challenge["token"], "captcha_answer": str(int(first) + int(second))}


@pytest.fixture
def submit(client, captcha):
    """Submit a report through the public API and return the response JSON."""

    def _submit(files=None, **fields):
        data = {"title": "Ndriçim i prishur", "description": "Llamba nuk punon", **captcha, **fields}
        response = client.post("/api/public/reports", data=data, files=files)
        assert response.status_code == 201, response.text
        return response.json()

    return _submit
