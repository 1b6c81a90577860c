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

import time
import logging
from google import genai
from google.genai import types

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"
JSON_MIME_TYPE = "application/json"
EMPTY_RESPONSE_MESSAGE = "The AI service returned an empty response."


class GeminiInvalidResponseException(Exception):
    pass


def make_client(api_key: str) -> genai.Client:
    return genai.Client(api_key=api_key)


def _truncate(prompt: str) -> str:
    return (prompt[:200] + "...") if len(prompt) > 200 else prompt


async def call_predict(
    client: genai.Client,
    query: str,
    model: str = DEFAULT_MODEL,
    system_instruction: str | None = None,
) -> str:
    """Calls Gemini for a plain-text completion."""
    config = None
    if system_instruction:
        config = types.GenerateContentConfig(system_instruction=system_instruction)

    logger.debug("Calling Gemini, prompt: '%s'", _truncate(query))
    response = await client.aio.models.generate_content(
        model=model,
        contents=query,
        config=config,
    )
    if not response.text:
        raise GeminiInvalidResponseException(EMPTY_RESPONSE_MESSAGE)
    return response.text


async def call_predict_with_schema(
    client: genai.Client,
    query: str,
    response_schema: types.Schema,
    model: str = DEFAULT_MODEL,
    system_instruction: str | None = None,
) -> str:
    """
    Calls Gemini with a response schema for structured output.

    Returns the raw response text; the schema biases the model toward
    parseable JSON but callers still parse and validate it.
    """
    start_time = time.time()
    logger.debug("Calling Gemini with schema, prompt: '%s'", _truncate(query))
    response = await client.aio.models.generate_content(
        model=model,
        contents=query,
        config=types.GenerateContentConfig(
            system_instruction=system_instruction,
            response_mime_type=JSON_MIME_TYPE,
            response_schema=response_schema,
        ),
    )
    logger.debug("Gemini with schema call took: %.2fs", time.time() - start_time)
    if not response.text:
        raise GeminiInvalidResponseException(EMPTY_RESPONSE_MESSAGE)
    return response.text
