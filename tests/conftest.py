import json
from urllib.parse import parse_qs, urlparse

import pytest
import requests

from syncer.config import load_config
from syncer.seerr_client import SeerrClient


class FakeResponse:
    def __init__(self, status_code=200, payload=None):
        self.status_code = status_code
        self._payload = payload
        self.text = "" if payload is None else json.dumps(payload)
        self.content = self.text.encode()

    def json(self):
        if self._payload is None:
            raise ValueError("no body")
        return self._payload


class FakeSeerr:
    """Stand-in for requests.Session backed by an in-memory user store."""

    def __init__(self, users=(), page_info=True):
        self.headers = {}
        self.users = [dict(u) for u in users]
        self.page_info = page_info
        self.calls = []
        self.fail_pages = set()
        self.page_bodies = {}
        self.fail_user_ids = set()
        self.unreachable = False

    def methods(self, method):
        return [c for c in self.calls if c[0] == method]

    def request(self, method, url, data=None, timeout=None):
        body = json.loads(data) if data else None
        self.calls.append((method, url, body))
        if self.unreachable:
            raise requests.ConnectionError("connection refused")

        parsed = urlparse(url)
        path = parsed.path.split("/api/v1", 1)[1]
        if method == "GET" and path == "/user":
            query = parse_qs(parsed.query)
            take = int(query["take"][0])
            skip = int(query["skip"][0])
            if skip // take in self.fail_pages:
                return FakeResponse(500, {"message": "boom"})
            if skip // take in self.page_bodies:
                return FakeResponse(200, self.page_bodies[skip // take])
            payload = {"results": self.users[skip:skip + take]}
            if self.page_info:
                payload["pageInfo"] = {"pages": -(-len(self.users) // take), "page": skip // take + 1}
            return FakeResponse(200, payload)
        if method == "GET" and path == "/status":
            return FakeResponse(200, {"version": "1.33.2"})

        user_id = int(path.split("/")[2])
        if user_id in self.fail_user_ids:
            return FakeResponse(500, {"message": "update failed"})
        for user in self.users:
            if user["id"] == user_id:
                settings = body.get("settings", body)
                user["notificationTypes"] = settings["notificationTypes"]
                return FakeResponse(200, user)
        return FakeResponse(404, {"message": "not found"})


def make_users(count, start=1):
    return [{"id": i, "email": f"user{i}@example.com"} for i in range(start, start + count)]


@pytest.fixture
def env(tmp_path):
    return {
        "SEERR_URL": "http://seerr.test",
        "SEERR_API_KEY": "secret-key",
        "SEERR_API_REVISION": "settings",
        "OUTPUT_DIR": str(tmp_path / "output"),
        "PROMPT_TIMEOUT": "1",
    }


@pytest.fixture
def config(env):
    return load_config(env)


@pytest.fixture
def legacy_config(env):
    return load_config({**env, "SEERR_API_REVISION": "legacy"})


@pytest.fixture
def fake():
    return FakeSeerr()


@pytest.fixture
def client(config, fake):
    return SeerrClient(config, session=fake)
