# tests/integration/test_api_review.py
import pytest
import pytest_asyncio
import httpx
from httpx import AsyncClient, ASGITransport
from unittest.mock import patch, AsyncMock
from pr_reviewer.config import Settings
from pr_reviewer.errors import MissingCredentialError, ModelInvocationError
from pr_reviewer.main import app
from pr_reviewer.platforms.github import GitHubClient
from pr_reviewer.store.memory import InMemoryChatLog, InMemoryHistoryStore


MODEL_OUTPUT = """SUMMARY: Adds a flag.
POTENTIAL BUGS:
- flag is never read
SUGGESTIONS:
- document the flag
TEST CASES:
- flag disabled"""

USER = {"X-User-Id": "alice@example.com"}


@pytest.fixture
def settings():
    return Settings(_env_file=None, github_token="test-token")


@pytest.fixture
def history():
    return InMemoryHistoryStore()


@pytest.fixture
def chat_log():
    return InMemoryChatLog()


@pytest.fixture
def mock_github():
    client = AsyncMock()
    client.get_pr_files.return_value = [
        {"filename": "a.js", "patch": "+x"},
        {"filename": "b.js"},
    ]
    client.post_issue_comment.return_value = {"id": 1, "html_url": "https://github.com/octo/repo/pull/7#issuecomment-1"}
    client.post_inline_comment.return_value = {"id": 2}
    return client


@pytest.fixture
def mock_provider():
    provider = AsyncMock()
    provider.generate.return_value = MODEL_OUTPUT
    return provider


@pytest_asyncio.fixture
async def client(settings, history, chat_log, mock_github, mock_provider):
    transport = ASGITransport(app=app)

    with patch("pr_reviewer.main.get_settings", return_value=settings), \
         patch("pr_reviewer.main.get_github", return_value=mock_github), \
         patch("pr_reviewer.main.get_provider", return_value=mock_provider), \
         patch("pr_reviewer.main.get_history_store", return_value=history), \
         patch("pr_reviewer.main.get_chat_log", return_value=chat_log):
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            yield c


@pytest.mark.integration
@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "model": "llama3"}


@pytest.mark.integration
@pytest.mark.asyncio
async def test_review_requires_identity(client):
    response = await client.post("/api/review", json={"owner": "octo", "repo": "repo", "prNumber": 7})

    assert response.status_code == 401


@pytest.mark.integration
@pytest.mark.asyncio
async def test_review_returns_parsed_review_and_files(client, history):
    response = await client.post(
        "/api/review",
        headers=USER,
        json={"owner": "octo", "repo": "repo", "prNumber": 7},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["review"] == {
        "summary": "Adds a flag.",
        "potentialBugs": ["flag is never read"],
        "suggestions": ["document the flag"],
        "testCases": ["flag disabled"],
    }
    assert [f["filename"] for f in data["files"]] == ["a.js", "b.js"]
    assert data["files"][1]["patch"] is None

    saved = history.list_reviews("alice@example.com")
    assert len(saved) == 1
    assert saved[0].pr_number == 7


@pytest.mark.integration
@pytest.mark.asyncio
async def test_review_fetch_error(client, mock_github, mock_provider, history):
    mock_github.get_pr_files.return_value = {"message": "Not Found"}

    response = await client.post(
        "/api/review",
        headers=USER,
        json={"owner": "octo", "repo": "repo", "prNumber": 7},
    )

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to fetch PR details."}
    mock_provider.generate.assert_not_called()
    assert history.list_reviews("alice@example.com") == []


@pytest.mark.integration
@pytest.mark.asyncio
async def test_review_model_error(client, mock_provider):
    mock_provider.generate.side_effect = ModelInvocationError("Failed to start ollama: not found")

    response = await client.post(
        "/api/review",
        headers=USER,
        json={"owner": "octo", "repo": "repo", "prNumber": 7},
    )

    assert response.status_code == 500
    assert "Failed to start ollama" in response.json()["error"]


@pytest.mark.integration
@pytest.mark.asyncio
async def test_history_round_trip(client):
    for pr_number in (1, 2):
        await client.post(
            "/api/review",
            headers=USER,
            json={"owner": "octo", "repo": "repo", "prNumber": pr_number},
        )

    response = await client.get("/api/history", headers=USER)

    assert response.status_code == 200
    history = response.json()["history"]
    assert [r["prNumber"] for r in history] == [2, 1]
    assert history[0]["status"] == "pending"
    assert history[0]["review"]["summary"] == "Adds a flag."

    other = await client.get("/api/history", headers={"X-User-Id": "bob@example.com"})
    assert other.json() == {"history": []}


@pytest.mark.integration
@pytest.mark.asyncio
async def test_clear_history(client, history):
    await client.post(
        "/api/review",
        headers=USER,
        json={"owner": "octo", "repo": "repo", "prNumber": 1},
    )

    response = await client.delete("/api/history", headers=USER)

    assert response.json() == {"success": True}
    assert history.list_reviews("alice@example.com") == []


@pytest.mark.integration
@pytest.mark.asyncio
async def test_history_requires_identity(client):
    assert (await client.get("/api/history")).status_code == 401
    assert (await client.delete("/api/history")).status_code == 401


@pytest.mark.integration
@pytest.mark.asyncio
async def test_feedback_general_comment(client, mock_github):
    response = await client.post(
        "/api/feedback",
        headers=USER,
        json={"owner": "octo", "repo": "repo", "prNumber": 7, "comment": "x", "action": "accept"},
    )

    assert response.status_code == 200
    assert response.json()["success"] is True
    assert response.json()["result"]["id"] == 1
    mock_github.post_issue_comment.assert_called_once_with("octo", "repo", 7, "✅ **Accepted**: x")


@pytest.mark.integration
@pytest.mark.asyncio
async def test_feedback_inline_comment(client, mock_github):
    response = await client.post(
        "/api/feedback",
        headers=USER,
        json={
            "owner": "octo",
            "repo": "repo",
            "prNumber": 7,
            "comment": "x",
            "action": "reject",
            "lineInfo": {"commitId": "abc", "path": "a.js", "line": 1},
        },
    )

    assert response.status_code == 200
    args = mock_github.post_inline_comment.call_args.args
    assert args[3] == "❌ **Rejected**: x"
    assert args[4].commit_id == "abc"


@pytest.mark.integration
@pytest.mark.asyncio
async def test_feedback_missing_token_is_reported(client, mock_github):
    mock_github.post_issue_comment.side_effect = MissingCredentialError("GITHUB_TOKEN is not set")

    response = await client.post(
        "/api/feedback",
        headers=USER,
        json={"owner": "octo", "repo": "repo", "prNumber": 7, "comment": "x"},
    )

    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "GITHUB_TOKEN is not set"}


@pytest.mark.integration
@pytest.mark.asyncio
async def test_feedback_unknown_action(client):
    response = await client.post(
        "/api/feedback",
        headers=USER,
        json={"owner": "octo", "repo": "repo", "prNumber": 7, "comment": "x", "action": "maybe"},
    )

    assert response.status_code == 422


@pytest.mark.integration
@pytest.mark.asyncio
async def test_chat_and_chat_history(client, mock_provider):
    mock_provider.generate.return_value = "Yes, it is safe."

    response = await client.post(
        "/api/chat",
        json={
            "message": "Is it safe?",
            "context": {"owner": "octo", "repo": "repo", "prNumber": 7, "review": {"summary": "s"}},
        },
    )

    assert response.status_code == 200
    assert response.json() == {"response": "Yes, it is safe."}
    assert mock_provider.generate.call_args.kwargs["model"] == "llama3"

    history = (await client.get("/api/chathistory")).json()["history"]
    assert len(history) == 1
    assert history[0]["userMessage"] == "Is it safe?"
    assert history[0]["modelResponse"] == "Yes, it is safe."


@pytest.mark.integration
@pytest.mark.asyncio
async def test_chat_requires_message_and_context(client):
    assert (await client.post("/api/chat", json={"message": "", "context": {}})).status_code == 422
    assert (await client.post("/api/chat", json={"message": "hi"})).status_code == 422


@pytest.mark.integration
@pytest.mark.asyncio
async def test_chat_model_error(client, mock_provider):
    mock_provider.generate.side_effect = ModelInvocationError("Failed to start ollama")

    response = await client.post("/api/chat", json={"message": "hi", "context": {}})

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to start ollama"}


@pytest.mark.integration
@pytest.mark.asyncio
async def test_feedback_connection_error_is_reported(client, httpx_mock):
    httpx_mock.add_exception(
        httpx.ConnectError("connection refused"),
        method="POST",
        url="https://api.github.com/repos/octo/repo/issues/7/comments",
    )

    with patch("pr_reviewer.main.get_github", return_value=GitHubClient(token="test-token")):
        response = await client.post(
            "/api/feedback",
            headers=USER,
            json={"owner": "octo", "repo": "repo", "prNumber": 7, "comment": "x", "action": "accept"},
        )

    assert response.status_code == 500
    data = response.json()
    assert data["success"] is False
    assert "connection refused" in data["error"]
