"""
Shared fixtures for the Newsdesk test suite.
Run with: pytest tests/ -v

pytest and pytest-flask are listed under extras_require["dev"] in setup.py.
Install with: pip install -e ".[dev]"
"""

import copy
import os
import shutil
import tempfile

import pytest

from newsdesk import create_app
from newsdesk.client import ApiClient, AdminContext
from newsdesk.modules.dashboard.routes import create_admin_db

ADMIN_EMAIL = "editor@example.com"
ADMIN_PASSWORD = "s3cret-pass"
BASE_URL = "http://newsdesk.test"


def make_config(db_dir):
    return {
        "TESTING": True,
        "SECRET_KEY": "test-secret",
        "DB_DIR": db_dir,
        "NEWS_DB": os.path.join(db_dir, "news.db"),
        "USER_DB": os.path.join(db_dir, "users.db"),
        "LOGS_DB": os.path.join(db_dir, "logs.db"),
        "STORAGE_TYPE": "local",
    }


@pytest.fixture
def tmp_db_dir():
    """Create a temporary directory for test databases, cleaned up after."""
    d = tempfile.mkdtemp(prefix="newsdesk-test-")
    yield d
    shutil.rmtree(d, ignore_errors=True)


@pytest.fixture
def app(tmp_db_dir):
    """Fully initialised Flask app with every Newsdesk module registered."""
    static_dir = os.path.join(tmp_db_dir, "static")
    return create_app(make_config(tmp_db_dir), static_folder=static_dir)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(client):
    """Test client with an admin session."""
    with client.session_transaction() as sess:
        sess["admin_id"] = 1
        sess["admin_email"] = ADMIN_EMAIL
    return client


class FakeResponse:
    """The parts of requests.Response that ApiClient reads."""

    def __init__(self, response):
        self._response = response
        self.status_code = response.status_code
        self.ok = response.status_code < 400
        self.reason = response.status
        self.headers = response.headers

    def json(self):
        data = self._response.get_json(silent=True)
        if data is None:
            raise ValueError("Response body is not JSON")
        return data


class FlaskSession:
    """
    Stand-in for requests.Session that sends every request to a Flask test
    client and records what was sent.
    """

    def __init__(self, test_client, base_url=BASE_URL):
        self.client = test_client
        self.base_url = base_url
        self.calls = []

    def request(self, method, url, params=None, json=None, data=None, files=None,
                timeout=None, allow_redirects=True):
        path = url[len(self.base_url):] if url.startswith(self.base_url) else url
        self.calls.append({
            "method": method,
            "path": path,
            "params": dict(params) if params else None,
            "json": copy.deepcopy(json),
        })

        kwargs = {"method": method, "query_string": params}
        if files:
            form = dict(data or {})
            for field, (filename, file_obj) in files.items():
                form[field] = (file_obj, filename)
            kwargs["data"] = form
            kwargs["content_type"] = "multipart/form-data"
        elif json is not None:
            kwargs["json"] = json
        elif data is not None:
            kwargs["data"] = data

        return FakeResponse(self.client.open(path, **kwargs))

    def calls_to(self, method, path=None):
        return [c for c in self.calls
                if c["method"] == method and (path is None or c["path"] == path)]


@pytest.fixture
def http(app):
    """Recording session bound to a fresh test client."""
    return FlaskSession(app.test_client())


@pytest.fixture
def api(app, http):
    """ApiClient signed in as an admin through the real login form."""
    with app.app_context():
        create_admin_db(ADMIN_EMAIL, ADMIN_PASSWORD)
    client = ApiClient(BASE_URL, session=http)
    assert client.login(ADMIN_EMAIL, ADMIN_PASSWORD)
    http.calls.clear()
    return client


class Recorder:
    """Collects navigation targets and sleep durations."""

    def __init__(self):
        self.paths = []
        self.sleeps = []

    def navigate(self, path):
        self.paths.append(path)

    def sleep(self, seconds):
        self.sleeps.append(seconds)


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def ctx(api, recorder):
    return AdminContext(api, navigate=recorder.navigate, sleep=recorder.sleep, redirect_delay=1.5)
