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
"""Gemini output-shape constraints for the structured AI actions."""

from google.genai import types

from shared.api import (
    ASSISTANT_RESPONSE_ANSWER,
    ASSISTANT_RESPONSE_NAVIGATION,
)

_STRING = types.Schema(type=types.Type.STRING)
_INTEGER = types.Schema(type=types.Type.INTEGER)
_STRING_LIST = types.Schema(type=types.Type.ARRAY, items=_STRING)

_RESOURCE = types.Schema(
    type=types.Type.OBJECT,
    properties={"title": _STRING, "authorOrChannel": _STRING},
)

TASK_SUGGESTIONS = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "description": _STRING,
        "effort": _INTEGER,
        "impact": _INTEGER,
        "tags": _STRING_LIST,
    },
)

MORE_TAG_SUGGESTIONS = types.Schema(
    type=types.Type.OBJECT,
    properties={"tags": _STRING_LIST},
)

TASK_BREAKDOWN = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "tasks": types.Schema(
            type=types.Type.ARRAY,
            items=types.Schema(
                type=types.Type.OBJECT,
                properties={
                    "name": _STRING,
                    "description": _STRING,
                    "effort": _INTEGER,
                    "impact": _INTEGER,
                },
            ),
        )
    },
)

DEVELOPMENT_PLAN = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "books": types.Schema(type=types.Type.ARRAY, items=_RESOURCE),
        "youtubeChannels": types.Schema(type=types.Type.ARRAY, items=_RESOURCE),
        "podcasts": types.Schema(type=types.Type.ARRAY, items=_RESOURCE),
    },
)

ALTERNATIVE_RESOURCE = _RESOURCE

ASSISTANT_RESPONSE = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "responseType": types.Schema(
            type=types.Type.STRING,
            enum=[ASSISTANT_RESPONSE_ANSWER, ASSISTANT_RESPONSE_NAVIGATION],
        ),
        "text": _STRING,
        "view": types.Schema(type=types.Type.STRING, nullable=True),
    },
    required=["responseType", "text"],
)
