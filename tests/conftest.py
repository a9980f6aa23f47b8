import pytest
from types import SimpleNamespace
from unittest.mock import MagicMock
from fastapi.testclient import TestClient

from app.api.routes import get_relay_config
from app.api.travel_routes import get_public_db, get_user_db, require_user
from app.core.gemini_client import RelayConfig
from app.core.supabase_client import CurrentUser
from app.main import app


class FakeQuery:
    """Records a PostgREST builder chain; execute() pops the next queued result for its table."""

    def __init__(self, db, table):
        self.db = db
        self.table = table
        self.ops = []

    def __getattr__(self, name):
        def op(*args, **kwargs):
            self.ops.append((name, args, kwargs))
            return self
        return op

    def execute(self):
        self.db.executed.append(self)
        if self.db.error is not None:
            raise self.db.error
        queue = self.db.responses.get(self.table, [])
        return SimpleNamespace(data=queue.pop(0) if queue else [])

    def op_names(self) -> list[str]:
        return [name for name, _, _ in self.ops]

    def args_of(self, name: str) -> list[tuple]:
        return [args for n, args, _ in self.ops if n == name]


class FakeSupabase:
    def __init__(self):
        self.responses = {}
        self.executed = []
        self.error = None

    def table(self, name):
        return FakeQuery(self, name)

    def queue(self, table, *results):
        self.responses.setdefault(table, []).extend(results)

    def calls(self, table) -> list[FakeQuery]:
        return [q for q in self.executed if q.table == table]


def gemini_response(status: int = 200, json_data=None, text: str = "") -> MagicMock:
    """Stand-in for a requests.Response from generateContent."""
    resp = MagicMock()
    resp.status_code = status
    resp.ok = 200 <= status < 300
    resp.text = text
    resp.json.return_value = json_data
    return resp


def gemini_candidate(text: str) -> dict:
    return {"candidates": [{"content": {"role": "model", "parts": [{"text": text}]}}]}


def make_turns(count: int) -> list[dict]:
    return [
        {"role": "user" if i % 2 == 0 else "assistant", "content": f"turn {i}"}
        for i in range(count)
    ]


@pytest.fixture
def relay_config():
    return RelayConfig(api_key="test-key")


@pytest.fixture
def db():
    return FakeSupabase()


@pytest.fixture
def user():
    return CurrentUser(id="user-1", email="traveller@example.com", access_token="token-1")


@pytest.fixture
def client(relay_config):
    app.dependency_overrides[get_relay_config] = lambda: relay_config
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def authed_client(db, user, relay_config):
    app.dependency_overrides[get_relay_config] = lambda: relay_config
    app.dependency_overrides[require_user] = lambda: user
    app.dependency_overrides[get_user_db] = lambda: db
    app.dependency_overrides[get_public_db] = lambda: db
    yield TestClient(app)
    app.dependency_overrides.clear()
