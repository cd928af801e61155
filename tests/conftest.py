import json
from urllib.parse import unquote

import pytest

from axle_client import AxleClient, AxleConfig
from axle_client.errors import HTTPStatusError, NotFoundError
from axle_client.transport import BaseTransport

TEST_SERVER = "http://axle.test:28902/"
TEST_API_NAME = "axletestapi"
TEST_KEY_NAME = "axletestkey"
TEST_KEYRING_NAME = "axletestkeyring"
TEST_API_ENDPOINT = "localhost:80"

STATS_RESULTS = {
    "uncached": {"1700000000": {"200": 4, "404": 1}},
    "cached": {"1700000000": {"200": 2}},
    "error": {},
}


class FakeAxleServer(BaseTransport):
    """
    In-memory stand-in for the management server, speaking the same envelope.
    Every call is recorded in `calls` as (method, path, body, params).
    """
    name = "fake"

    def __init__(self, base_url=TEST_SERVER):
        super().__init__(base_url)
        self.store = {"api": {}, "key": {}, "keyring": {}}
        self.keyring_keys = {}
        self.calls = []
        self.clock = 1_700_000_000_000.0

    # -- helpers -------------------------------------------------------
    def _tick(self):
        self.clock += 1000.0
        return self.clock

    def _fail(self, method, path, status, message):
        body = json.dumps({"results": {"error": {"message": message}}}).encode()
        cls = NotFoundError if status == 404 else HTTPStatusError
        raise cls(method, self.url_for(path), status, "Not Found" if status == 404 else "Bad Request", body)

    @staticmethod
    def _ok(results):
        return json.dumps({"meta": {"version": 1, "status_code": 200}, "results": results}).encode()

    def _page(self, items, params):
        ids = sorted(items)
        if params and "from" in params:
            ids = ids[int(params["from"]):int(params["to"]) + 1]
        return {i: items[i] for i in ids}

    # -- routing -------------------------------------------------------
    def request(self, method, path, body=None, params=None):
        payload = json.loads(self.to_bytes(body)) if body is not None else None
        self.calls.append((method, path, payload, params))
        parts = [unquote(p) for p in path.split("/")]

        if parts == ["ping"]:
            return b"pong"
        if parts == ["info"]:
            return self._ok({"apiaxle": "1.14.0", "node": "v0.10"})
        if len(parts) == 2 and parts[1] == "charts":
            return self._ok({"top": 12})
        if len(parts) == 1 and parts[0].endswith("s"):
            kind = parts[0][:-1]
            return self._ok(self._page(self.store[kind], params))

        kind, ident = parts[0], parts[1]
        items = self.store[kind]

        if len(parts) == 2:
            if method == "POST":
                if ident in items:
                    self._fail(method, path, 400, f"{kind} '{ident}' already exists.")
                if kind == "api" and not payload.get("endPoint"):
                    self._fail(method, path, 400, "endPoint is required")
                now = self._tick()
                items[ident] = dict(payload, createdAt=now)
                return self._ok(items[ident])
            if ident not in items:
                self._fail(method, path, 404, f"{kind} '{ident}' not found.")
            if method == "GET":
                return self._ok(items[ident])
            if method == "PUT":
                old = items[ident]
                items[ident] = dict(old, **payload)
                return self._ok({"old": old, "new": items[ident]})
            if method == "DELETE":
                del items[ident]
                return self._ok(True)

        if ident not in items:
            self._fail(method, path, 404, f"{kind} '{ident}' not found.")
        action = parts[2]

        if action in ("linkkey", "unlinkkey"):
            key_id = parts[3]
            if key_id not in self.store["key"]:
                self._fail(method, path, 404, f"key '{key_id}' not found.")
            key = self.store["key"][key_id]
            if kind == "api":
                apis = set(key.get("forApis", []))
                if action == "linkkey":
                    apis.add(ident)
                else:
                    apis.discard(ident)
                key["forApis"] = sorted(apis)
            else:
                ring = self.keyring_keys.setdefault(ident, set())
                if action == "linkkey":
                    ring.add(key_id)
                else:
                    ring.discard(key_id)
            return self._ok(key)
        if action == "keys":
            if kind == "api":
                linked = {k: v for k, v in self.store["key"].items() if ident in v.get("forApis", [])}
            else:
                linked = {k: self.store["key"][k] for k in self.keyring_keys.get(ident, ())}
            return self._ok(self._page(linked, params))
        if action == "apis":
            return self._ok({a: self.store["api"][a] for a in items[ident].get("forApis", [])})
        if action == "stats":
            return self._ok(STATS_RESULTS)
        if action in ("keycharts", "apicharts"):
            return self._ok({"other": 3})
        self._fail(method, path, 404, f"no route for {path}")


@pytest.fixture
def server():
    return FakeAxleServer()


@pytest.fixture
def client(server):
    return AxleClient(transport=server, config=AxleConfig(base_url=TEST_SERVER))
