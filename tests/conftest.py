"""Shared test fixtures."""

import json
from dataclasses import dataclass, field

import httpx
import pytest

from business_hub.adapters.api_client import HttpxApiClient
from business_hub.adapters.gateways import parse_business
from business_hub.adapters.session_store import InMemorySessionStore
from business_hub.config import Settings
from business_hub.containers import AppContainer, build_services
from business_hub.domain.session import Session

BASE_URL = "https://api.test/api"
TOKEN = "token-123"


def _business() -> dict[str, object]:
    return {
        "_id": "biz-1",
        "name": "Acme Supplies",
        "email": "owner@acme.test",
        "phone": "555-0100",
    }


def _plans() -> list[dict[str, object]]:
    return [
        {
            "_id": "plan-basic",
            "name": "Basic",
            "price": 9,
            "description": "For new shops",
            "features": ["100 products"],
            "photoLimit": 50,
            "productsLimit": 100,
            "customersLimit": 100,
        },
        {
            "_id": "plan-pro",
            "name": "Pro",
            "price": 29,
            "description": "For growing shops",
            "features": ["Unlimited products"],
            "photoLimit": -1,
            "productsLimit": -1,
            "customersLimit": -1,
        },
    ]


@dataclass
class FakeBackend:
    """In-memory stand-in for the remote REST API."""

    token: str = TOKEN
    password: str = "secret"
    business: dict[str, object] = field(default_factory=_business)
    plans: list[dict[str, object]] = field(default_factory=_plans)
    products: list[dict[str, object]] = field(default_factory=list)
    customers: list[dict[str, object]] = field(default_factory=list)
    orders: list[dict[str, object]] = field(default_factory=list)
    subscriptions: list[dict[str, object]] = field(default_factory=list)
    metrics: dict[str, object] = field(default_factory=dict)
    requests: list[httpx.Request] = field(default_factory=list)
    failures: dict[str, tuple[int, str | None]] = field(default_factory=dict)
    offline: set[str] = field(default_factory=set)
    reject_all: bool = False
    next_id: int = 0

    def fail(
        self,
        path: str,
        status_code: int,
        message: str | None = None,
        method: str | None = None,
    ) -> None:
        """Make requests to ``path`` (optionally only one verb) answer with an error."""
        key = f"{method} {path}" if method else path
        self.failures[key] = (status_code, message)

    def paths(self) -> list[tuple[str, str]]:
        return [(r.method, r.url.path.removeprefix("/api")) for r in self.requests]

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/api")
        if path in self.offline:
            raise httpx.ConnectError("connection refused", request=request)
        failure = self.failures.get(f"{request.method} {path}") or self.failures.get(path)
        if failure:
            status_code, message = failure
            body: dict[str, object] = {"success": False}
            if message:
                body["message"] = message
            return httpx.Response(status_code, json=body)
        if path.startswith("/auth/"):
            return self._auth(path, _body(request))
        if self.reject_all or request.headers.get("Authorization") != (
            f"Bearer {self.token}"
        ):
            return httpx.Response(401, json={"success": False, "message": "Unauthorized"})
        return self._resource(request.method, path, _body(request))

    def _auth(self, path: str, body: dict[str, object]) -> httpx.Response:
        if path == "/auth/login":
            if body.get("password") != self.password:
                return _error(400, "Invalid credentials")
            return _ok({"token": self.token, "business": self.business})
        return _ok({"_id": "biz-2", "name": body.get("businessName")})

    def _resource(
        self, method: str, path: str, body: dict[str, object]
    ) -> httpx.Response:
        parts = path.strip("/").split("/")
        name = parts[0]
        if name == "plans":
            return _ok(self.plans)
        if name == "dashboard":
            return _ok(self.metrics)
        collection: list[dict[str, object]] = getattr(self, name)
        if method == "GET":
            return _ok(collection)
        if method == "POST":
            row = self._create(name, body)
            collection.append(row)
            return _ok(row)
        entity_id = parts[1]
        row = next((item for item in collection if item["_id"] == entity_id), None)
        if row is None:
            return _error(404, "Not found")
        if method == "PUT":
            row.update(body)
            return _ok(row)
        collection.remove(row)
        return _ok(None)

    def _create(self, name: str, body: dict[str, object]) -> dict[str, object]:
        self.next_id += 1
        entity_id = f"{name[:4]}-{self.next_id:08d}"
        if name == "orders":
            customer = next(
                item for item in self.customers if item["_id"] == body["customerId"]
            )
            return {
                "_id": entity_id,
                "business": "biz-1",
                "customer": customer,
                "products": [
                    {
                        "product": line["productId"],
                        "quantity": line["quantity"],
                        "price": line["price"],
                    }
                    for line in body["products"]  # type: ignore[union-attr]
                ],
                "total": body["total"],
                "status": "pending",
                "paymentStatus": "pending",
                "orderDate": "2024-03-01T10:00:00.000Z",
            }
        if name == "subscriptions":
            plan = next(item for item in self.plans if item["_id"] == body["planId"])
            return {
                "_id": entity_id,
                "business": "biz-1",
                "plan": plan,
                "status": "active",
                "startDate": "2024-03-01T00:00:00.000Z",
            }
        return {"_id": entity_id, "business": "biz-1", **body}


def _body(request: httpx.Request) -> dict[str, object]:
    if not request.content:
        return {}
    return json.loads(request.content.decode())


def _ok(data: object) -> httpx.Response:
    return httpx.Response(200, json={"success": True, "data": data})


def _error(status_code: int, message: str) -> httpx.Response:
    return httpx.Response(status_code, json={"success": False, "message": message})


@pytest.fixture
def settings() -> Settings:
    return Settings(api_base_url=BASE_URL, session_file="unused.json")


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def session_store() -> InMemorySessionStore:
    return InMemorySessionStore()


@pytest.fixture
def api_client(
    backend: FakeBackend, session_store: InMemorySessionStore
) -> HttpxApiClient:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(backend.handle))
    return HttpxApiClient(
        base_url=BASE_URL, session_store=session_store, http_client=http_client
    )


@pytest.fixture
def logged_in(session_store: InMemorySessionStore) -> InMemorySessionStore:
    session_store.save(Session(token=TOKEN, business=parse_business(_business())))
    return session_store


@pytest.fixture
def container(
    settings: Settings,
    session_store: InMemorySessionStore,
    api_client: HttpxApiClient,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return build_services(settings, session_store, api_client, close_resources)
