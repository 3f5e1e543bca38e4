"""Pytest fixtures: an in-memory helpdesk service behind both HTTP libraries."""
import json
from typing import Any, Dict, List, Optional, Tuple
from unittest.mock import AsyncMock, patch
from urllib.parse import parse_qsl, urlencode, urlparse, urlsplit

import httpx
import pytest
import requests

from helpdesk_client import HelpdeskApi

SITE = "https://acme.example.com"
EMAIL = "admin@acme.com"
PASSWORD = "secret"

DEFAULT_PER_PAGE = 100

# Headers the client sets itself; library defaults (Host, Accept-Encoding...) differ between requests and httpx
RECORDED_HEADERS = ("Accept", "Authorization", "Content-Type", "User-Agent")


class FakeHelpdeskService:
    """
    Minimal stand-in for the remote service.

    Records every request it receives (method, url, params, body, headers)
    so tests can compare what the blocking and awaitable surfaces sent.
    """

    def __init__(self):
        self.requests: List[Tuple[str, str, Tuple, Optional[bytes], Dict[str, str]]] = []
        self._next_id = 1000
        self.brands: Dict[int, dict] = {}
        self.groups: Dict[int, dict] = {}
        self.users: Dict[int, dict] = {}
        self.memberships: Dict[int, dict] = {}
        self.current_user_id = 1
        self._seed()

    # -- seed data ------------------------------------------------------------

    def _seed(self):
        self.brands[1] = self._record(1, "brands", name="Acme", active=True, subdomain="acme", default=True)

        for group_id, name in [(11, "Support"), (12, "Billing"), (13, "Sales"), (14, "Escalations")]:
            self.groups[group_id] = self._record(group_id, "groups", name=name, deleted=False)

        self.users[1] = self._record(
            1, "users", name="Admin", email=EMAIL, role="admin", ticket_restriction=None
        )
        for user_id in (2, 3, 4):
            self.users[user_id] = self._record(
                user_id, "users", name=f"Agent {user_id}", email=f"agent{user_id}@acme.com", role="agent"
            )

        membership_id = 101
        for group_id in (11, 12, 13, 14):
            self.memberships[membership_id] = self._record(
                membership_id, "group_memberships", user_id=1, group_id=group_id, default=(group_id == 11)
            )
            membership_id += 1
        for user_id in (2, 3, 4):
            self.memberships[membership_id] = self._record(
                membership_id, "group_memberships", user_id=user_id, group_id=11, default=True
            )
            membership_id += 1

    def _record(self, record_id: int, collection: str, **fields) -> dict:
        record = {"id": record_id, "url": f"{SITE}/api/v2/{collection}/{record_id}.json"}
        record.update(fields)
        record["created_at"] = "2024-01-01T00:00:00Z"
        record["updated_at"] = "2024-01-01T00:00:00Z"
        return record

    def _new_id(self) -> int:
        self._next_id += 1
        return self._next_id

    # -- HTTP library entry points --------------------------------------------

    def adapter_send(self, prepared, **kwargs):
        """Stands in for requests.adapters.HTTPAdapter.send (auth already applied)"""
        status, content = self.handle_raw(prepared.method, prepared.url, prepared.body, prepared.headers)
        response = requests.Response()
        response.status_code = status
        response._content = content
        response.url = prepared.url
        response.request = prepared
        response.headers["Content-Type"] = "application/json"
        return response

    def transport_send(self, request):
        """Stands in for httpx.AsyncHTTPTransport.handle_async_request (auth already applied)"""
        status, content = self.handle_raw(request.method, str(request.url), request.content, request.headers)
        return httpx.Response(status, content=content, headers={"Content-Type": "application/json"})

    def handle_raw(self, method, url, body, headers) -> Tuple[int, bytes]:
        parts = urlsplit(url)
        params = parse_qsl(parts.query, keep_blank_values=True)
        recorded = {name: headers[name] for name in RECORDED_HEADERS if name in headers}
        status, payload = self.handle(method, url.split("?")[0], params, body or None, recorded)
        return status, json.dumps(payload).encode("utf-8") if payload is not None else b""

    # -- routing --------------------------------------------------------------

    def handle(self, method, url, params, body, headers) -> Tuple[int, Optional[dict]]:
        params = tuple(params or ())
        headers = dict(headers or {})
        self.requests.append((method, url, params, body, headers))

        if not headers.get("Authorization"):
            return 401, {"error": "Couldn't authenticate you"}

        path = urlparse(url).path
        assert path.startswith("/api/v2/") and path.endswith(".json"), path
        segments = path[len("/api/v2/"):-len(".json")].split("/")
        query = dict(params)
        payload = json.loads(body.decode("utf-8")) if body else None

        try:
            return self._route(method, segments, query, payload, url)
        except KeyError:
            return 404, {"error": "RecordNotFound", "description": "Not found"}

    def _route(self, method, segments, query, payload, url):
        head = segments[0]

        if head == "search" and method == "GET":
            return 200, self._search(query, url)

        if head == "brands":
            return self._crud(method, segments[1:], self.brands, "brand", "brands", payload, query, url)

        if head == "groups":
            if segments[1:] == ["assignable"]:
                return 200, self._page(self._sorted(self.groups), "groups", query, url)
            if len(segments) >= 3 and segments[2] == "memberships":
                group_id = int(segments[1])
                self.groups[group_id]
                scoped = [m for m in self._sorted(self.memberships) if m["group_id"] == group_id]
                return 200, self._page(scoped, "group_memberships", query, url)
            return self._crud(method, segments[1:], self.groups, "group", "groups", payload, query, url)

        if head == "group_memberships":
            if segments[1:] == ["assignable"]:
                return 200, self._page(self._sorted(self.memberships), "group_memberships", query, url)
            if method == "POST":
                return self._create_membership(payload["group_membership"])
            return self._crud(
                method, segments[1:], self.memberships, "group_membership", "group_memberships", payload, query, url
            )

        if head == "users":
            if segments[1:] == ["me"]:
                return 200, {"user": self.users[self.current_user_id]}
            if len(segments) >= 3 and segments[2] == "group_memberships":
                return self._user_memberships(method, int(segments[1]), segments[3:], query, url)
            if method == "DELETE" and len(segments) == 2:
                user_id = int(segments[1])
                del self.users[user_id]
                for membership_id in [k for k, m in self.memberships.items() if m["user_id"] == user_id]:
                    del self.memberships[membership_id]
                return 204, None
            return self._crud(method, segments[1:], self.users, "user", "users", payload, query, url)

        return 404, {"error": "InvalidEndpoint"}

    def _crud(self, method, rest, store, key, collection, payload, query, url):
        if not rest:
            if method == "GET":
                return 200, self._page(self._sorted(store), collection, query, url)
            if method == "POST":
                fields = dict(payload[key])
                error = self._validate(key, fields)
                if error:
                    return 422, error
                record_id = self._new_id()
                store[record_id] = self._record(record_id, collection, **fields)
                return 201, {key: store[record_id]}
            return 405, {"error": "MethodNotAllowed"}

        record_id = int(rest[0])
        if method == "GET":
            return 200, {key: store[record_id]}
        if method == "PUT":
            record = store[record_id]
            changes = {k: v for k, v in payload[key].items() if k != "id"}
            error = self._validate(key, changes, ignore_id=record_id)
            if error:
                return 422, error
            record.update(changes)
            record["updated_at"] = "2024-06-01T00:00:00Z"
            return 200, {key: record}
        if method == "DELETE":
            del store[record_id]
            return 204, None
        return 405, {"error": "MethodNotAllowed"}

    def _validate(self, key, fields, ignore_id=None) -> Optional[dict]:
        if key == "brand" and "subdomain" in fields:
            taken = [
                b for b in self.brands.values() if b["subdomain"] == fields["subdomain"] and b["id"] != ignore_id
            ]
            if taken:
                return {
                    "error": "RecordInvalid",
                    "description": "Record validation errors",
                    "details": {"subdomain": [{"description": "Subdomain: has already been taken"}]},
                }
        if key == "user" and ignore_id is None and not fields.get("name"):
            return {
                "error": "RecordInvalid",
                "description": "Record validation errors",
                "details": {"name": [{"description": "Name: cannot be blank"}]},
            }
        return None

    def _create_membership(self, fields):
        self.users[fields["user_id"]]
        self.groups[fields["group_id"]]
        record_id = self._new_id()
        is_first = not any(m["user_id"] == fields["user_id"] for m in self.memberships.values())
        self.memberships[record_id] = self._record(
            record_id,
            "group_memberships",
            user_id=fields["user_id"],
            group_id=fields["group_id"],
            default=fields.get("default", is_first),
        )
        return 201, {"group_membership": self.memberships[record_id]}

    def _user_memberships(self, method, user_id, rest, query, url):
        self.users[user_id]
        owned = [m for m in self._sorted(self.memberships) if m["user_id"] == user_id]

        if not rest:
            return 200, self._page(owned, "group_memberships", query, url)

        membership = self.memberships[int(rest[0])]
        if membership["user_id"] != user_id:
            raise KeyError(rest[0])

        if rest[1:] == ["make_default"] and method == "PUT":
            for other in owned:
                other["default"] = other["id"] == membership["id"]
            return 200, self._page(owned, "group_memberships", {}, url)
        if method == "GET" and len(rest) == 1:
            return 200, {"group_membership": membership}
        if method == "DELETE" and len(rest) == 1:
            del self.memberships[membership["id"]]
            return 204, None
        return 405, {"error": "MethodNotAllowed"}

    def _search(self, query, url):
        terms = query["query"].split()
        wanted_type = None
        words = []
        for term in terms:
            if term.startswith("type:"):
                wanted_type = term[len("type:"):]
            else:
                words.append(term.lower())

        candidates = []
        if wanted_type in (None, "user"):
            candidates += [dict(u, result_type="user") for u in self._sorted(self.users)]
        if wanted_type in (None, "group"):
            candidates += [dict(g, result_type="group") for g in self._sorted(self.groups)]

        def matches(record):
            text = " ".join(str(record.get(f, "")) for f in ("name", "email")).lower()
            return all(word in text for word in words)

        results = [r for r in candidates if matches(r)]
        if query.get("sort_by") == "name":
            results.sort(key=lambda r: r["name"], reverse=query.get("sort_order") == "desc")
        page = self._page(results, "results", query, url)
        page["facets"] = None
        return page

    # -- helpers --------------------------------------------------------------

    @staticmethod
    def _sorted(store: Dict[int, dict]) -> List[dict]:
        return [store[k] for k in sorted(store)]

    @staticmethod
    def _page(records: List[dict], key: str, query: Dict[str, str], url: str) -> Dict[str, Any]:
        page = int(query.get("page", 1))
        per_page = int(query.get("per_page", DEFAULT_PER_PAGE))
        start = (page - 1) * per_page
        chunk = records[start:start + per_page]
        base = url.split("?")[0]

        def link(number):
            return f"{base}?{urlencode({'page': number, 'per_page': per_page})}"

        return {
            key: chunk,
            "count": len(records),
            "next_page": link(page + 1) if start + per_page < len(records) else None,
            "previous_page": link(page - 1) if page > 1 else None,
        }


# ============================================================================
# FIXTURES
# ============================================================================


@pytest.fixture
def service():
    """Fresh in-memory service per test"""
    return FakeHelpdeskService()


@pytest.fixture
def http(service):
    """Route the requests adapter and the httpx transport to the fake service"""
    with patch("requests.adapters.HTTPAdapter.send", side_effect=service.adapter_send) as sync_mock, patch(
        "httpx.AsyncHTTPTransport.handle_async_request", new_callable=AsyncMock, side_effect=service.transport_send
    ) as async_mock:
        yield sync_mock, async_mock


@pytest.fixture
def api(http):
    """Client authenticated with a password against the fake service"""
    client = HelpdeskApi(SITE, EMAIL, password=PASSWORD)
    yield client
    client.close()
