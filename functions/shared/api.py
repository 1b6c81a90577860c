# Copyright 2025 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
# ==============================================================================

from dataclasses import dataclass
from typing import Any, Optional

AI_ENDPOINT_PATH = "/ai"

ASSISTANT_RESPONSE_ANSWER = "answer"
ASSISTANT_RESPONSE_NAVIGATION = "navigation_suggestion"
ASSISTANT_VIEWS = (
    "dashboard",
    "goals",
    "weekly",
    "schedule",
    "financials",
    "personalDevelopment",
    "analytics",
    "agents",
)


@dataclass
class ErrorDescriptor:
    """Error payload returned to callers in place of a domain value."""

    message: str

    def to_json(self) -> dict:
        return {"error": self.message}


@dataclass
class ActionResult:
    """Outcome of a single dispatched action.

    Exactly one of `value` and `error` is populated.
    """

    value: Any = None
    error: Optional[ErrorDescriptor] = None
    status_code: int = 200

    def __post_init__(self):
        if (self.value is None) == (self.error is None):
            raise ValueError("ActionResult needs exactly one of value or error")

    @classmethod
    def ok(cls, value: Any) -> "ActionResult":
        return cls(value=value)

    @classmethod
    def failure(cls, message: str, status_code: int) -> "ActionResult":
        return cls(error=ErrorDescriptor(message), status_code=status_code)

    @property
    def is_error(self) -> bool:
        return self.error is not None

    def to_json(self) -> Any:
        if self.error is not None:
            return self.error.to_json()
        return self.value


def assistant_fallback(message: str) -> dict:
    """A displayable assistant reply describing a failure."""
    return {
        "responseType": ASSISTANT_RESPONSE_ANSWER,
        "text": f"I'm sorry, I've encountered an issue. {message}",
    }
