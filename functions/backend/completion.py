"""
Completion service abstraction for Gemini and an in-memory test double.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Protocol

from google.genai import types

from models import gemini


class MissingApiKeyError(RuntimeError):
    """Raised when the completion service credential is not configured."""


class CompletionClient(Protocol):
    """Defines the operations the dispatcher needs from the AI service."""

    async def complete(
        self,
        prompt: str,
        *,
        response_schema: Optional[types.Schema] = None,
        system_instruction: Optional[str] = None,
    ) -> str:
        ...


@dataclass
class CompletionCall:
    prompt: str
    response_schema: Optional[types.Schema] = None
    system_instruction: Optional[str] = None


@dataclass
class InMemoryCompletionClient:
    """
    Test double that replays scripted responses and records every call.

    Each scripted response is either a string (returned as the completion
    text) or an exception instance (raised from the call).
    """

    responses: list[Any] = field(default_factory=list)
    calls: list[CompletionCall] = field(default_factory=list)

    def queue(self, *responses: Any) -> None:
        self.responses.extend(responses)

    def reset(self) -> None:
        self.responses.clear()
        self.calls.clear()

    async def complete(
        self,
        prompt: str,
        *,
        response_schema: Optional[types.Schema] = None,
        system_instruction: Optional[str] = None,
    ) -> str:
        self.calls.append(
            CompletionCall(
                prompt=prompt,
                response_schema=response_schema,
                system_instruction=system_instruction,
            )
        )
        if not self.responses:
            raise gemini.GeminiInvalidResponseException(
                "No scripted completion available."
            )
        response = self.responses.pop(0)
        if isinstance(response, BaseException):
            raise response
        return response


class GeminiCompletionClient:
    """
    Gemini-backed completion client.

    Holds a single `genai.Client` for the life of the process; the handle is
    only read after construction so concurrent requests can share it.
    """

    def __init__(self, api_key: str | None, model: str = gemini.DEFAULT_MODEL):
        if not api_key:
            raise MissingApiKeyError(
                "API_KEY is not set in environment variables."
            )
        self.model = model
        self._client = gemini.make_client(api_key)

    async def complete(
        self,
        prompt: str,
        *,
        response_schema: Optional[types.Schema] = None,
        system_instruction: Optional[str] = None,
    ) -> str:
        if response_schema is None:
            return await gemini.call_predict(
                self._client,
                prompt,
                model=self.model,
                system_instruction=system_instruction,
            )
        return await gemini.call_predict_with_schema(
            self._client,
            prompt,
            response_schema,
            model=self.model,
            system_instruction=system_instruction,
        )
