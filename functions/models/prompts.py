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
"""Prompt templates for the AI actions."""

TASK_SUGGESTIONS_PROMPT = (
    'Based on the task name "{task_name}", generate a concise, one-paragraph '
    "description (max 3 sentences), estimate its effort (1-5), impact (1-10), "
    "and suggest 3-5 relevant single-word tags."
)

MORE_TAG_SUGGESTIONS_PROMPT = (
    'For the task "{task_name}" (Description: "{description}"), suggest 5 '
    "additional relevant single-word tags. Return only the tags."
)

TASK_BREAKDOWN_PROMPT = (
    'Break down the high-level goal "{goal_name}" (Description: '
    '"{goal_description}") into 5-7 actionable, smaller tasks. For each task, '
    "provide a name, a concise one-sentence description, and estimate its "
    "effort (1-5) and impact (1-10) relative to achieving the main goal."
)

DEVELOPMENT_PLAN_PROMPT = (
    'Create a personal development plan for the goal: "{goal}". Provide a '
    "list of the top {book_count} books (with authors), {channel_count} "
    "YouTube channels, and {podcast_count} podcasts to achieve this goal."
)

ALTERNATIVE_RESOURCE_PROMPT = (
    'Given the learning goal "{goal}", suggest an alternative resource for '
    '"{resource_to_replace}". Provide a title and the author/channel name.'
)

TASK_PRIORITIZATION_PROMPT = """Given the following list of pending tasks and today's date ({today}), identify the top 3 tasks to focus on. Provide a very concise, one-sentence justification for each, considering both impact and urgency (due dates). Keep the total response under 75 words. The output must be a simple numbered list in plain text. Do not use any markdown formatting.

Tasks:
{task_lines}"""

TASK_PRIORITIZATION_LINE = "- {name} (Impact: {impact}, Due: {due_date})"
TASK_IMPACT_RATED = "{impact}/10"
TASK_IMPACT_UNRATED = "N/A"

GENERATE_CONTENT_PROMPT = (
    "Please provide a concise, to-the-point response in plain text. "
    "Absolutely no markdown formatting. Keep the total response brief. "
    'User prompt: "{prompt}"'
)

GOAL_STRATEGY_PROMPT = (
    'Analyze the goal: "{name}" (Progress: {progress}%). Suggest 3-4 key '
    "strategic steps to achieve this. Provide a brief, one-sentence "
    "explanation for each. Total response under 100 words. Output as a "
    "simple numbered list in plain text, with no markdown."
)

ASSISTANT_SYSTEM_INSTRUCTION = (
    "You are Wolfie, an AI assistant for the WolfPad app. Your mission is to "
    "apply the 80/20 principle to help the user focus. You MUST consider the "
    "user's current view ('{current_view}') to make responses relevant. You "
    "MUST respond with a JSON object with 'responseType' and 'text'. For "
    "navigation, 'responseType' is 'navigation_suggestion' and you must "
    "include a 'view' ID and confirmation 'text'. Valid views: {views}."
)

ASSISTANT_CONTEXT = (
    "Data: - VIEW: {current_view} - TASKS: {tasks_json} - GOALS: {goals_json}"
)

ASSISTANT_PROMPT = '{context_string}\n\nUser query: "{query}"'
