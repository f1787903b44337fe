"""
Edit history and profile API tests

Supabase table access is replaced by a recording fake query builder.
"""
from types import SimpleNamespace
from unittest.mock import patch

import pytest

from core import cache
from conftest import TEST_USER_ID, VALID_TOKEN


class FakeQuery:
    """Chainable stand-in for a postgrest request builder."""

    def __init__(self, result=None, error=None):
        self.calls = []
        self.result = result or SimpleNamespace(data=[], count=0)
        self.error = error

    def __getattr__(self, name):
        def method(*args, **kwargs):
            self.calls.append((name, args, kwargs))
            return self
        return method

    def execute(self):
        if self.error:
            raise self.error
        return self.result


class FakeSupabase:
    def __init__(self, query: FakeQuery):
        self.query = query
        self.tables = []

    def table(self, name):
        self.tables.append(name)
        return self.query


def history_row(entry_id="h1", prompt="Make it sepia"):
    return {
        "id": entry_id,
        "user_id": TEST_USER_ID,
        "prompt": prompt,
        "image_url": "https://cdn.test/in.png",
        "edited_image_url": "https://cdn.test/out.png",
        "created_at": "2025-01-02T03:04:05+00:00",
    }


@pytest.fixture
def fake_table(mock_supabase_auth):
    query = FakeQuery()
    supabase = FakeSupabase(query)
    with patch("api.history.get_supabase_for_token", return_value=supabase) as factory:
        supabase.factory = factory
        yield supabase


@pytest.mark.integration
class TestHistoryAuth:

    @pytest.mark.parametrize("method, url", [
        ("get", "/api/history"),
        ("get", "/api/history/recent"),
        ("delete", "/api/history/h1"),
        ("get", "/api/profile"),
    ])
    def test_requires_authentication(self, client, mock_supabase_auth, method, url):
        response = client.request(method.upper(), url)

        assert response.status_code == 401
        assert "Missing authentication" in response.json()["error"]

    def test_invalid_token(self, client, mock_supabase_auth):
        response = client.get("/api/history", headers={"Authorization": "Bearer nope"})

        assert response.status_code == 401
        assert "Invalid authentication" in response.json()["error"]

    def test_uses_caller_token(self, client, fake_table, auth_headers):
        client.get("/api/history", headers=auth_headers)

        fake_table.factory.assert_called_once_with(VALID_TOKEN)


@pytest.mark.integration
class TestListHistory:

    def test_lists_callers_rows(self, client, fake_table, auth_headers):
        fake_table.query.result = SimpleNamespace(data=[history_row("h2"), history_row("h1")], count=2)

        response = client.get("/api/history", headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["total_count"] == 2
        assert [item["id"] for item in body["items"]] == ["h2", "h1"]

        assert fake_table.tables == ["edit_history"]
        calls = fake_table.query.calls
        assert ("eq", ("user_id", TEST_USER_ID), {}) in calls
        assert ("order", ("created_at",), {"desc": True}) in calls
        assert ("range", (0, 49), {}) in calls

    def test_pagination(self, client, fake_table, auth_headers):
        client.get("/api/history", params={"limit": 10, "offset": 20}, headers=auth_headers)

        assert ("range", (20, 29), {}) in fake_table.query.calls

    def test_results_are_cached_per_user(self, client, fake_table, auth_headers):
        fake_table.query.result = SimpleNamespace(data=[history_row()], count=1)

        client.get("/api/history", headers=auth_headers)
        client.get("/api/history", headers=auth_headers)

        assert fake_table.tables == ["edit_history"]

    def test_storage_failure(self, client, fake_table, auth_headers):
        fake_table.query.error = RuntimeError("connection reset")

        response = client.get("/api/history", headers=auth_headers)

        assert response.status_code == 500
        assert response.json() == {"error": "connection reset"}


@pytest.mark.integration
class TestRecentPrompts:

    def test_recent(self, client, fake_table, auth_headers):
        fake_table.query.result = SimpleNamespace(data=[
            {"id": "h1", "prompt": "Apply sketch effect", "created_at": "2025-01-02T03:04:05+00:00"},
        ])

        response = client.get("/api/history/recent", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["prompts"][0]["prompt"] == "Apply sketch effect"
        assert ("select", ("id, prompt, created_at",), {}) in fake_table.query.calls
        assert ("limit", (20,), {}) in fake_table.query.calls


@pytest.mark.integration
class TestCreateAndDelete:

    def test_create_records_owner(self, client, fake_table, auth_headers):
        fake_table.query.result = SimpleNamespace(data=[history_row("new")])

        response = client.post("/api/history", headers=auth_headers, json={
            "prompt": "Make it sepia",
            "image_url": "https://cdn.test/in.png",
            "edited_image_url": "https://cdn.test/out.png",
        })

        assert response.status_code == 201
        assert response.json()["item"]["id"] == "new"
        name, args, _ = fake_table.query.calls[0]
        assert name == "insert"
        assert args[0]["user_id"] == TEST_USER_ID

    def test_create_invalidates_cache(self, client, fake_table, auth_headers):
        cache.set_cached(cache.make_history_cache_key(TEST_USER_ID), ([], 0))
        cache.set_cached(cache.make_history_cache_key("someone-else"), ([], 0))
        fake_table.query.result = SimpleNamespace(data=[history_row("new")])

        client.post("/api/history", headers=auth_headers, json={
            "prompt": "Make it sepia",
            "edited_image_url": "https://cdn.test/out.png",
        })

        assert cache.get_cached(cache.make_history_cache_key(TEST_USER_ID)) is None
        assert cache.get_cached(cache.make_history_cache_key("someone-else")) == ([], 0)

    def test_delete(self, client, fake_table, auth_headers):
        fake_table.query.result = SimpleNamespace(data=[history_row("h1")])

        response = client.delete("/api/history/h1", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["success"] is True
        calls = fake_table.query.calls
        assert ("delete", (), {}) in calls
        assert ("eq", ("id", "h1"), {}) in calls
        assert ("eq", ("user_id", TEST_USER_ID), {}) in calls

    def test_delete_missing_row(self, client, fake_table, auth_headers):
        fake_table.query.result = SimpleNamespace(data=[])

        response = client.delete("/api/history/other", headers=auth_headers)

        assert response.status_code == 404
        assert response.json() == {"error": "History item not found"}


@pytest.mark.integration
class TestProfile:

    def test_profile(self, client, fake_table, auth_headers):
        fake_table.query.result = SimpleNamespace(data=[{
            "user_id": TEST_USER_ID,
            "full_name": "Ada Example",
            "email": "user@example.com",
            "avatar_url": None,
            "created_at": "2025-01-01T00:00:00+00:00",
        }])

        response = client.get("/api/profile", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["profile"]["full_name"] == "Ada Example"
        assert fake_table.tables == ["profiles"]

    def test_missing_profile(self, client, fake_table, auth_headers):
        response = client.get("/api/profile", headers=auth_headers)

        assert response.status_code == 404
        assert response.json() == {"error": "Profile not found"}

    def test_profile_is_scoped_to_caller(self, client, fake_table, auth_headers):
        client.get("/api/profile", headers=auth_headers)

        assert ("eq", ("user_id", TEST_USER_ID), {}) in fake_table.query.calls

    def test_profile_storage_failure(self, client, fake_table, auth_headers):
        fake_table.query.error = RuntimeError("connection reset")

        response = client.get("/api/profile", headers=auth_headers)

        assert response.status_code == 500
        assert response.json() == {"error": "connection reset"}


@pytest.mark.integration
class TestStorageFailures:

    @pytest.mark.parametrize("method, url, body", [
        ("GET", "/api/history/recent", None),
        ("POST", "/api/history", {"prompt": "Make it sepia", "edited_image_url": "https://cdn.test/out.png"}),
        ("DELETE", "/api/history/h1", None),
    ])
    def test_query_error_is_500(self, client, fake_table, auth_headers, method, url, body):
        fake_table.query.error = RuntimeError("connection reset")

        response = client.request(method, url, headers=auth_headers, json=body)

        assert response.status_code == 500
        assert response.json() == {"error": "connection reset"}

    def test_create_without_returned_row(self, client, fake_table, auth_headers):
        response = client.post("/api/history", headers=auth_headers, json={
            "prompt": "Make it sepia",
            "edited_image_url": "https://cdn.test/out.png",
        })

        assert response.status_code == 500
        assert response.json() == {"error": "Failed to create history record"}
