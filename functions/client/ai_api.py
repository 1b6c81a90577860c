"""
Generic proxy for calling AI actions over HTTP, plus one typed wrapper per
action.

The proxy makes a single request per call and never retries. Successful
bodies are returned as-is; the server enforces the response shape.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from shared.api import AI_ENDPOINT_PATH, assistant_fallback

logger = logging.getLogger(__name__)

DEFAULT_API_PREFIX = "/api"
UNKNOWN_ERROR_MESSAGE = "An unknown error occurred while contacting the AI service."


class AiApiError(Exception):
    """An AI action call failed; `message` is safe to show to users."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _extract_error_message(response: httpx.Response, action: str) -> str:
    fallback = f"API call for action '{action}' failed."
    try:
        body = response.json()
    except ValueError:
        return fallback
    if isinstance(body, dict):
        error = body.get("error")
        if error:
            return str(error)
    return fallback


class AiApiClient:
    """
    Async client for `POST {api_prefix}/ai`.

    Pass an `httpx.AsyncClient` to share a connection pool or to plug in a
    test transport; otherwise the client creates and owns one.
    """

    def __init__(
        self,
        base_url: str = "",
        client: Optional[httpx.AsyncClient] = None,
        api_prefix: str = DEFAULT_API_PREFIX,
        timeout_s: float = 60.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.endpoint = f"{api_prefix.rstrip('/')}{AI_ENDPOINT_PATH}"
        self._client = client or httpx.AsyncClient(
            base_url=self.base_url, timeout=timeout_s
        )
        self._owns_client = client is None

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "AiApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def call(self, action: str, params: dict[str, Any]) -> Any:
        try:
            response = await self._client.post(
                self.endpoint, json={"action": action, "params": params}
            )
        except httpx.HTTPError as exc:
            logger.error("Error in AI API call for action '%s': %s", action, exc)
            raise AiApiError(str(exc) or UNKNOWN_ERROR_MESSAGE) from exc

        if not response.is_success:
            message = _extract_error_message(response, action)
            logger.error(
                "AI API call for action '%s' returned %d: %s",
                action,
                response.status_code,
                message,
            )
            raise AiApiError(message, status_code=response.status_code)

        try:
            return response.json()
        except ValueError as exc:
            raise AiApiError(
                f"API call for action '{action}' returned invalid JSON.",
                status_code=response.status_code,
            ) from exc

    async def get_task_suggestions(self, task_name: str) -> dict:
        return await self.call("getTaskSuggestions", {"taskName": task_name})

    async def get_more_tag_suggestions(
        self, task_name: str, description: str
    ) -> list[str]:
        return await self.call(
            "getMoreTagSuggestions",
            {"taskName": task_name, "description": description},
        )

    async def get_task_breakdown_for_goal(
        self, goal_name: str, goal_description: str
    ) -> list[dict]:
        return await self.call(
            "getTaskBreakdownForGoal",
            {"goalName": goal_name, "goalDescription": goal_description},
        )

    async def get_development_plan(
        self, goal: str, book_count: int, channel_count: int, podcast_count: int
    ) -> dict:
        return await self.call(
            "getDevelopmentPlan",
            {
                "goal": goal,
                "bookCount": book_count,
                "channelCount": channel_count,
                "podcastCount": podcast_count,
            },
        )

    async def get_alternative_resource(
        self, goal: str, resource_to_replace: str
    ) -> dict:
        return await self.call(
            "getAlternativeResource",
            {"goal": goal, "resourceToReplace": resource_to_replace},
        )

    async def get_task_prioritization(self, tasks: list[dict]) -> str:
        return await self.call("getTaskPrioritization", {"tasks": tasks})

    async def generate_content(self, prompt: str) -> str:
        return await self.call("generateContent", {"prompt": prompt})

    async def get_goal_strategy(self, goal: dict) -> str:
        return await self.call("getGoalStrategy", {"goal": goal})

    async def get_ai_assistant_response(self, query: str, context: dict) -> dict:
        """Never raises on API failures: they become an 'answer' reply."""
        try:
            return await self.call(
                "getAiAssistantResponse", {"query": query, "context": context}
            )
        except AiApiError as exc:
            return assistant_fallback(exc.message or "An unexpected error occurred.")
