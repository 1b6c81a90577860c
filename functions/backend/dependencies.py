"""
Dependency wiring for the FastAPI app.
"""

from __future__ import annotations

from supabase import Client

from backend.actions import ActionDispatcher
from backend.completion import CompletionClient, GeminiCompletionClient
from backend.config import get_settings
from backend.data_platform import create_data_platform_client

_completion_client: CompletionClient | None = None
_dispatcher: ActionDispatcher | None = None
_data_platform_client: Client | None = None


def get_completion_client() -> CompletionClient:
    """
    Return a singleton completion client shared by all requests.

    Raises MissingApiKeyError when no API key is configured.
    """
    global _completion_client
    if _completion_client:
        return _completion_client

    settings = get_settings()
    _completion_client = GeminiCompletionClient(
        api_key=settings.api_key, model=settings.gemini_model
    )
    return _completion_client


def get_dispatcher() -> ActionDispatcher:
    global _dispatcher
    if _dispatcher:
        return _dispatcher
    _dispatcher = ActionDispatcher(get_completion_client())
    return _dispatcher


def get_data_platform_client() -> Client:
    global _data_platform_client
    if _data_platform_client:
        return _data_platform_client
    _data_platform_client = create_data_platform_client(get_settings())
    return _data_platform_client


def override_completion_client(client: CompletionClient | None) -> None:
    """Swap the process-wide completion client, e.g. for tests or local runs."""
    global _completion_client, _dispatcher
    _completion_client = client
    _dispatcher = None
