import json
import unittest
from datetime import date

from backend.actions import (
    INVALID_ACTION_MESSAGE,
    ActionDispatcher,
    _HANDLERS,
)
from backend.completion import InMemoryCompletionClient
from backend.schemas import ACTION_NAMES, ACTION_REQUEST_TYPES
from models import response_schemas


class ActionDispatcherTests(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.completion = InMemoryCompletionClient()
        self.dispatcher = ActionDispatcher(
            self.completion, today=lambda: date(2025, 3, 14)
        )

    async def test_unknown_actions_make_no_completion_call(self):
        for name in ["", "getMoreTasks", "GETTASKSUGGESTIONS", None, 42, ["x"]]:
            with self.subTest(name=name):
                result = await self.dispatcher.dispatch(name, {"taskName": "x"})
                self.assertTrue(result.is_error)
                self.assertEqual(result.status_code, 400)
                self.assertEqual(result.error.message, INVALID_ACTION_MESSAGE)
                self.assertIsNone(result.value)
        self.assertEqual(self.completion.calls, [])

    async def test_task_suggestions_clamps_ratings(self):
        cases = [
            ({"effort": 99, "impact": -4}, (5, 1)),
            ({}, (3, 5)),
            ({"effort": "high", "impact": "low"}, (3, 5)),
            ({"effort": 0, "impact": 0}, (3, 5)),
            ({"effort": None, "impact": True}, (3, 5)),
            ({"effort": 2.6, "impact": 7.2}, (3, 7)),
        ]
        for raw, (effort, impact) in cases:
            with self.subTest(raw=raw):
                self.completion.queue(json.dumps(raw))
                result = await self.dispatcher.dispatch(
                    "getTaskSuggestions", {"taskName": "Plan trip"}
                )
                self.assertFalse(result.is_error)
                self.assertEqual(result.value["effort"], effort)
                self.assertEqual(result.value["impact"], impact)

    async def test_task_suggestions_keeps_other_fields(self):
        raw = {
            "description": "Book flights and hotels.",
            "effort": 2,
            "impact": 6,
            "tags": ["travel", "planning", "booking"],
        }
        self.completion.queue("  " + json.dumps(raw) + "\n")
        result = await self.dispatcher.dispatch(
            "getTaskSuggestions", {"taskName": "Plan trip"}
        )
        self.assertEqual(result.value, raw)

        call = self.completion.calls[0]
        self.assertIn('"Plan trip"', call.prompt)
        self.assertIs(call.response_schema, response_schemas.TASK_SUGGESTIONS)
        self.assertIsNone(call.system_instruction)

    async def test_task_breakdown_clamps_each_task(self):
        self.completion.queue(
            json.dumps(
                {
                    "tasks": [
                        {"name": "Outline", "description": "d", "effort": 8, "impact": 3},
                        {"name": "Draft", "description": "d"},
                    ]
                }
            )
        )
        result = await self.dispatcher.dispatch(
            "getTaskBreakdownForGoal",
            {"goalName": "Write a book", "goalDescription": "Fiction"},
        )
        self.assertEqual(
            result.value,
            [
                {"name": "Outline", "description": "d", "effort": 5, "impact": 3},
                {"name": "Draft", "description": "d", "effort": 3, "impact": 5},
            ],
        )

    async def test_task_breakdown_without_tasks_is_empty(self):
        self.completion.queue("{}")
        result = await self.dispatcher.dispatch(
            "getTaskBreakdownForGoal", {"goalName": "Rest"}
        )
        self.assertFalse(result.is_error)
        self.assertEqual(result.value, [])

    async def test_more_tag_suggestions_returns_tags(self):
        self.completion.queue(json.dumps({"tags": ["focus", " deep ", "", 3]}))
        result = await self.dispatcher.dispatch(
            "getMoreTagSuggestions",
            {"taskName": "Study", "description": "Exam prep"},
        )
        self.assertEqual(result.value, ["focus", "deep"])
        self.assertIn("Exam prep", self.completion.calls[0].prompt)

    async def test_development_plan_is_returned_unchanged(self):
        plan = {
            "books": [{"title": "Deep Work", "authorOrChannel": "Cal Newport"}],
            "youtubeChannels": [],
            "podcasts": [{"title": "Focus", "authorOrChannel": "Someone"}],
        }
        self.completion.queue(json.dumps(plan))
        result = await self.dispatcher.dispatch(
            "getDevelopmentPlan",
            {"goal": "Focus", "bookCount": 1, "channelCount": 0, "podcastCount": 1},
        )
        self.assertEqual(result.value, plan)
        prompt = self.completion.calls[0].prompt
        self.assertIn("top 1 books", prompt)
        self.assertIn("0 YouTube channels", prompt)

    async def test_task_prioritization_is_plain_text(self):
        self.completion.queue("1. File taxes - due soon.")
        result = await self.dispatcher.dispatch(
            "getTaskPrioritization",
            {
                "tasks": [
                    {"name": "File taxes", "impact": 9, "due_date": "2025-04-15"},
                    {"name": "Clean desk"},
                ]
            },
        )
        self.assertEqual(result.value, "1. File taxes - due soon.")
        call = self.completion.calls[0]
        self.assertIsNone(call.response_schema)
        self.assertIn("(2025-03-14)", call.prompt)
        self.assertIn("- File taxes (Impact: 9/10, Due: 2025-04-15)", call.prompt)
        self.assertIn("- Clean desk (Impact: N/A, Due: None)", call.prompt)

    async def test_huge_integer_rating_is_clamped_not_failed(self):
        self.completion.queue('{"effort": 1' + "0" * 400 + ', "impact": 2}')
        result = await self.dispatcher.dispatch(
            "getTaskSuggestions", {"taskName": "Plan trip"}
        )
        self.assertFalse(result.is_error)
        self.assertEqual(result.value["effort"], 5)
        self.assertEqual(result.value["impact"], 2)

    async def test_nan_in_completion_json_becomes_500(self):
        self.completion.queue('{"title": NaN, "authorOrChannel": "A"}')
        result = await self.dispatcher.dispatch(
            "getAlternativeResource", {"goal": "g", "resourceToReplace": "r"}
        )
        self.assertEqual(result.status_code, 500)
        self.assertIn("NaN", result.error.message)

    async def test_null_task_and_goal_fields_are_accepted(self):
        self.completion.queue("1. Stretch.", "1. Keep going.")
        result = await self.dispatcher.dispatch(
            "getTaskPrioritization",
            {
                "tasks": [
                    {"name": "Stretch", "impact": None, "due_date": None, "completed": None}
                ]
            },
        )
        self.assertFalse(result.is_error)
        self.assertIn("- Stretch (Impact: N/A, Due: None)", self.completion.calls[0].prompt)

        result = await self.dispatcher.dispatch(
            "getGoalStrategy", {"goal": {"name": "Yoga", "progress": None}}
        )
        self.assertFalse(result.is_error)
        self.assertIn('"Yoga" (Progress: 0%)', self.completion.calls[1].prompt)

    async def test_goal_strategy_prompt(self):
        self.completion.queue("1. Run daily.")
        result = await self.dispatcher.dispatch(
            "getGoalStrategy", {"goal": {"name": "Marathon", "progress": 40}}
        )
        self.assertEqual(result.value, "1. Run daily.")
        self.assertIn('"Marathon" (Progress: 40%)', self.completion.calls[0].prompt)

    async def test_completion_failure_becomes_500(self):
        self.completion.queue(ConnectionError("network down"))
        result = await self.dispatcher.dispatch("generateContent", {"prompt": "hi"})
        self.assertEqual(result.status_code, 500)
        self.assertEqual(result.error.message, "network down")
        self.assertIsNone(result.value)

    async def test_failure_without_message_gets_generic_message(self):
        self.completion.queue(RuntimeError())
        result = await self.dispatcher.dispatch("generateContent", {"prompt": "hi"})
        self.assertEqual(
            result.error.message,
            "An unknown error occurred while processing generateContent.",
        )

    async def test_non_object_json_becomes_500(self):
        self.completion.queue("null")
        result = await self.dispatcher.dispatch(
            "getAlternativeResource", {"goal": "g", "resourceToReplace": "r"}
        )
        self.assertEqual(result.status_code, 500)
        self.assertTrue(result.error.message)

    async def test_assistant_response_uses_system_instruction(self):
        reply = {"responseType": "navigation_suggestion", "text": "Opening goals.", "view": "goals"}
        self.completion.queue(json.dumps(reply))
        result = await self.dispatcher.dispatch(
            "getAiAssistantResponse",
            {
                "query": "Show my goals",
                "context": {
                    "currentView": "weekly",
                    "tasks": [{"name": "Gym", "impact": 4, "goal_id": 7}],
                    "goals": [{"name": "Health", "progress": 30}],
                },
            },
        )
        self.assertEqual(result.value, reply)
        call = self.completion.calls[0]
        self.assertIn("('weekly')", call.system_instruction)
        self.assertIn('"goalId":7', call.prompt)
        self.assertIn('User query: "Show my goals"', call.prompt)
        self.assertIs(call.response_schema, response_schemas.ASSISTANT_RESPONSE)

    async def test_assistant_failure_resolves_to_answer(self):
        params = {"query": "Hi", "context": {"currentView": "dashboard"}}
        for failure in [RuntimeError("boom"), "{broken", '{"responseType": "dance"}']:
            with self.subTest(failure=failure):
                self.completion.queue(failure)
                result = await self.dispatcher.dispatch("getAiAssistantResponse", params)
                self.assertFalse(result.is_error)
                self.assertEqual(result.status_code, 200)
                self.assertEqual(result.value["responseType"], "answer")
                self.assertTrue(result.value["text"])

    def test_every_action_has_a_handler(self):
        self.assertEqual(set(_HANDLERS), set(ACTION_REQUEST_TYPES))
        self.assertEqual(
            ACTION_NAMES,
            {
                "getTaskSuggestions",
                "getMoreTagSuggestions",
                "getTaskBreakdownForGoal",
                "getDevelopmentPlan",
                "getAlternativeResource",
                "getTaskPrioritization",
                "generateContent",
                "getGoalStrategy",
                "getAiAssistantResponse",
            },
        )


if __name__ == "__main__":
    unittest.main()
