# src/pr_reviewer/main.py
import logging
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import Any
from fastapi import FastAPI, Header, HTTPException
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from pr_reviewer.config import Settings
from pr_reviewer.errors import ReviewPipelineError
from pr_reviewer.models.chat import ChatEntry
from pr_reviewer.models.github import FeedbackAction, FileChange, LineInfo
from pr_reviewer.models.review import ParsedReview, ReviewRecord
from pr_reviewer.platforms.github import GitHubClient
from pr_reviewer.providers.base import LLMProvider
from pr_reviewer.providers.ollama import OllamaProvider
from pr_reviewer.review.chat import ChatAssistant
from pr_reviewer.review.engine import ReviewEngine
from pr_reviewer.review.feedback import post_feedback
from pr_reviewer.store.base import ChatLog, HistoryStore
from pr_reviewer.store.memory import InMemoryChatLog, InMemoryHistoryStore


@lru_cache
def get_settings() -> Settings:
    return Settings()


logging.basicConfig(level=get_settings().log_level)
logger = logging.getLogger(__name__)


@lru_cache
def get_provider() -> LLMProvider:
    """Shared provider, so every request goes through the same concurrency limit."""
    settings = get_settings()
    return OllamaProvider(
        model=settings.ollama_model,
        binary=settings.ollama_binary,
        timeout=settings.llm_timeout,
        max_concurrency=settings.llm_max_concurrency,
    )


@lru_cache
def get_history_store() -> HistoryStore:
    return InMemoryHistoryStore(capacity=get_settings().history_capacity)


@lru_cache
def get_chat_log() -> ChatLog:
    return InMemoryChatLog()


def get_github(settings: Settings) -> GitHubClient:
    return GitHubClient(token=settings.github_token, base_url=settings.github_api_url)


def require_identity(x_user_id: str | None) -> str:
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Authentication required")
    return x_user_id


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("AI PR Reviewer starting...")
    yield
    logger.info("AI PR Reviewer shutting down...")


app = FastAPI(title="AI PR Reviewer", lifespan=lifespan)


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ReviewRequest(ApiModel):
    owner: str
    repo: str
    pr_number: int


class ReviewResponse(ApiModel):
    review: ParsedReview
    files: list[FileChange]


class HistoryResponse(ApiModel):
    history: list[ReviewRecord]


class FeedbackRequest(ApiModel):
    owner: str
    repo: str
    pr_number: int
    comment: str
    action: FeedbackAction | None = None
    line_info: LineInfo | None = None


class ChatRequest(ApiModel):
    message: str = Field(min_length=1)
    context: dict[str, Any]
    history: list[Any] | None = None


class ChatHistoryResponse(ApiModel):
    history: list[ChatEntry]


@app.get("/health")
async def health():
    return {"status": "ok", "model": get_settings().ollama_model}


@app.post("/api/review", response_model=ReviewResponse)
async def submit_review(request: ReviewRequest, x_user_id: str | None = Header(None)):
    """Review a pull request and add the result to the caller's history."""
    identity = require_identity(x_user_id)
    settings = get_settings()
    engine = ReviewEngine(
        github=get_github(settings),
        provider=get_provider(),
        history=get_history_store(),
        model=settings.ollama_model,
    )

    try:
        result = await engine.review_pr(
            identity=identity,
            owner=request.owner,
            repo=request.repo,
            pr_number=request.pr_number,
        )
    except ReviewPipelineError as e:
        logger.exception(f"Review failed for {request.owner}/{request.repo}#{request.pr_number}: {e}")
        return JSONResponse(status_code=500, content={"error": str(e)})

    return ReviewResponse(review=result.review, files=result.files)


@app.get("/api/history", response_model=HistoryResponse)
async def get_history(x_user_id: str | None = Header(None)):
    identity = require_identity(x_user_id)
    return HistoryResponse(history=get_history_store().list_reviews(identity))


@app.delete("/api/history")
async def clear_history(x_user_id: str | None = Header(None)):
    identity = require_identity(x_user_id)
    get_history_store().clear(identity)
    return {"success": True}


@app.post("/api/feedback")
async def submit_feedback(request: FeedbackRequest, x_user_id: str | None = Header(None)):
    """Relay an accept/reject decision to the PR as a comment."""
    require_identity(x_user_id)
    settings = get_settings()

    try:
        result = await post_feedback(
            get_github(settings),
            owner=request.owner,
            repo=request.repo,
            pr_number=request.pr_number,
            comment=request.comment,
            action=request.action,
            line_info=request.line_info,
        )
    except ReviewPipelineError as e:
        logger.exception(f"Feedback failed for {request.owner}/{request.repo}#{request.pr_number}: {e}")
        return JSONResponse(status_code=500, content={"success": False, "error": str(e)})

    return {"success": True, "result": result}


@app.post("/api/chat")
async def chat(request: ChatRequest):
    settings = get_settings()
    assistant = ChatAssistant(
        provider=get_provider(),
        chat_log=get_chat_log(),
        model=settings.chat_model,
    )

    try:
        response = await assistant.ask(request.message, request.context, request.history)
    except ReviewPipelineError as e:
        logger.exception(f"Chat failed: {e}")
        return JSONResponse(status_code=500, content={"error": str(e)})

    return {"response": response}


@app.get("/api/chathistory", response_model=ChatHistoryResponse)
async def get_chat_history():
    return ChatHistoryResponse(history=get_chat_log().entries())
