"""
AI action registry and dispatcher.

Every action request variant declared in `backend.schemas` maps to exactly
one async handler registered here. A handler builds a prompt from its typed
params, calls the completion service (with a response schema for the
structured actions) and post-processes the result.

`ActionDispatcher.dispatch` is the error boundary: it never raises. Unknown
actions and params that do not fit their action become 400 results before
any completion call is made; handler failures become 500 results, except
for actions registered with a fallback, which turn the failure into a
regular value.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Awaitable, Callable, Optional

from pydantic import BaseModel, ValidationError

from backend.completion import CompletionClient
from backend.ratings import normalize_ratings
from backend.schemas import (
    ACTION_NAMES,
    ACTION_REQUEST_TYPES,
    AlternativeResourceParams,
    AlternativeResourceRequest,
    AssistantParams,
    AssistantRequest,
    DevelopmentPlanParams,
    DevelopmentPlanRequest,
    GenerateContentParams,
    GenerateContentRequest,
    GoalStrategyParams,
    GoalStrategyRequest,
    MoreTagSuggestionsParams,
    MoreTagSuggestionsRequest,
    TaskBreakdownParams,
    TaskBreakdownRequest,
    TaskPrioritizationParams,
    TaskPrioritizationRequest,
    TaskSuggestionsParams,
    TaskSuggestionsRequest,
    action_request_adapter,
)
from models import prompts, response_schemas
from models.gemini import GeminiInvalidResponseException
from shared.api import (
    ASSISTANT_RESPONSE_ANSWER,
    ASSISTANT_RESPONSE_NAVIGATION,
    ASSISTANT_VIEWS,
    ActionResult,
    assistant_fallback,
)

logger = logging.getLogger(__name__)

INVALID_ACTION_MESSAGE = "Invalid or missing action"


class InvalidActionError(ValueError):
    """The request names no known action or carries unusable params."""


@dataclass(frozen=True)
class ActionContext:
    completion: CompletionClient
    today: Callable[[], date] = date.today


Handler = Callable[[ActionContext, Any], Awaitable[Any]]


@dataclass(frozen=True)
class Registration:
    handler: Handler
    on_error: Optional[Callable[[str], Any]] = None


_HANDLERS: dict[type[BaseModel], Registration] = {}


def handles(
    request_type: type[BaseModel],
    on_error: Optional[Callable[[str], Any]] = None,
):
    """Register the decorated coroutine as the handler for `request_type`."""

    def decorator(func: Handler) -> Handler:
        if request_type in _HANDLERS:
            raise RuntimeError(f"Duplicate handler for {request_type.__name__}")
        _HANDLERS[request_type] = Registration(handler=func, on_error=on_error)
        return func

    return decorator


def _reject_constant(name: str):
    # NaN/Infinity parse in Python but cannot be rendered back as JSON.
    raise GeminiInvalidResponseException(
        f"The AI service returned an invalid JSON value: {name}"
    )


def _parse_json_object(text: str) -> dict:
    result = json.loads(text.strip(), parse_constant=_reject_constant)
    if not isinstance(result, dict):
        raise GeminiInvalidResponseException(
            "The AI service returned JSON that is not an object."
        )
    return result


@handles(TaskSuggestionsRequest)
async def get_task_suggestions(
    ctx: ActionContext, params: TaskSuggestionsParams
) -> dict:
    prompt = prompts.TASK_SUGGESTIONS_PROMPT.format(task_name=params.taskName)
    text = await ctx.completion.complete(
        prompt, response_schema=response_schemas.TASK_SUGGESTIONS
    )
    return normalize_ratings(_parse_json_object(text))


@handles(MoreTagSuggestionsRequest)
async def get_more_tag_suggestions(
    ctx: ActionContext, params: MoreTagSuggestionsParams
) -> list[str]:
    prompt = prompts.MORE_TAG_SUGGESTIONS_PROMPT.format(
        task_name=params.taskName, description=params.description
    )
    text = await ctx.completion.complete(
        prompt, response_schema=response_schemas.MORE_TAG_SUGGESTIONS
    )
    tags = _parse_json_object(text).get("tags") or []
    if not isinstance(tags, list):
        raise GeminiInvalidResponseException("Expected a list of tags.")
    return [tag.strip() for tag in tags if isinstance(tag, str) and tag.strip()]


@handles(TaskBreakdownRequest)
async def get_task_breakdown_for_goal(
    ctx: ActionContext, params: TaskBreakdownParams
) -> list[dict]:
    prompt = prompts.TASK_BREAKDOWN_PROMPT.format(
        goal_name=params.goalName, goal_description=params.goalDescription
    )
    text = await ctx.completion.complete(
        prompt, response_schema=response_schemas.TASK_BREAKDOWN
    )
    tasks = _parse_json_object(text).get("tasks") or []
    if not isinstance(tasks, list):
        raise GeminiInvalidResponseException("Expected a list of tasks.")
    return [normalize_ratings(task) for task in tasks if isinstance(task, dict)]


@handles(DevelopmentPlanRequest)
async def get_development_plan(
    ctx: ActionContext, params: DevelopmentPlanParams
) -> dict:
    prompt = prompts.DEVELOPMENT_PLAN_PROMPT.format(
        goal=params.goal,
        book_count=params.bookCount,
        channel_count=params.channelCount,
        podcast_count=params.podcastCount,
    )
    text = await ctx.completion.complete(
        prompt, response_schema=response_schemas.DEVELOPMENT_PLAN
    )
    return _parse_json_object(text)


@handles(AlternativeResourceRequest)
async def get_alternative_resource(
    ctx: ActionContext, params: AlternativeResourceParams
) -> dict:
    prompt = prompts.ALTERNATIVE_RESOURCE_PROMPT.format(
        goal=params.goal, resource_to_replace=params.resourceToReplace
    )
    text = await ctx.completion.complete(
        prompt, response_schema=response_schemas.ALTERNATIVE_RESOURCE
    )
    return _parse_json_object(text)


@handles(TaskPrioritizationRequest)
async def get_task_prioritization(
    ctx: ActionContext, params: TaskPrioritizationParams
) -> str:
    task_lines = "\n".join(
        prompts.TASK_PRIORITIZATION_LINE.format(
            name=task.name,
            impact=(
                prompts.TASK_IMPACT_RATED.format(impact=task.impact)
                if task.impact is not None
                else prompts.TASK_IMPACT_UNRATED
            ),
            due_date=task.due_date or "None",
        )
        for task in params.tasks
    )
    prompt = prompts.TASK_PRIORITIZATION_PROMPT.format(
        today=ctx.today().isoformat(), task_lines=task_lines
    )
    return await ctx.completion.complete(prompt)


@handles(GenerateContentRequest)
async def generate_content(
    ctx: ActionContext, params: GenerateContentParams
) -> str:
    prompt = prompts.GENERATE_CONTENT_PROMPT.format(prompt=params.prompt)
    return await ctx.completion.complete(prompt)


@handles(GoalStrategyRequest)
async def get_goal_strategy(ctx: ActionContext, params: GoalStrategyParams) -> str:
    prompt = prompts.GOAL_STRATEGY_PROMPT.format(
        name=params.goal.name, progress=params.goal.progress or 0
    )
    return await ctx.completion.complete(prompt)


@handles(AssistantRequest, on_error=assistant_fallback)
async def get_ai_assistant_response(
    ctx: ActionContext, params: AssistantParams
) -> dict:
    context = params.context
    system_instruction = prompts.ASSISTANT_SYSTEM_INSTRUCTION.format(
        current_view=context.currentView,
        views=", ".join(f"'{view}'" for view in ASSISTANT_VIEWS),
    )
    tasks_json = json.dumps(
        [
            {
                "name": task.name,
                "due": task.due_date,
                "impact": task.impact,
                "completed": task.completed,
                "goalId": task.goal_id,
            }
            for task in context.tasks
        ],
        separators=(",", ":"),
    )
    goals_json = json.dumps(
        [{"name": goal.name, "progress": goal.progress} for goal in context.goals],
        separators=(",", ":"),
    )
    context_string = prompts.ASSISTANT_CONTEXT.format(
        current_view=context.currentView,
        tasks_json=tasks_json,
        goals_json=goals_json,
    )
    prompt = prompts.ASSISTANT_PROMPT.format(
        context_string=context_string, query=params.query
    )
    text = await ctx.completion.complete(
        prompt,
        response_schema=response_schemas.ASSISTANT_RESPONSE,
        system_instruction=system_instruction,
    )
    reply = _parse_json_object(text)
    if reply.get("responseType") not in (
        ASSISTANT_RESPONSE_ANSWER,
        ASSISTANT_RESPONSE_NAVIGATION,
    ) or not isinstance(reply.get("text"), str):
        raise GeminiInvalidResponseException(
            "The AI assistant returned an unexpected response."
        )
    return reply


_missing = [t.__name__ for t in ACTION_REQUEST_TYPES if t not in _HANDLERS]
if _missing:
    raise RuntimeError(f"No handler registered for: {', '.join(_missing)}")


def parse_action_request(action_name: Any, params: Any) -> BaseModel:
    """Resolve a raw action name and params into a typed request variant."""
    if not isinstance(action_name, str) or action_name not in ACTION_NAMES:
        raise InvalidActionError(INVALID_ACTION_MESSAGE)
    try:
        return action_request_adapter.validate_python(
            {"action": action_name, "params": params if params is not None else {}}
        )
    except ValidationError as exc:
        first = exc.errors()[0]
        location = ".".join(
            str(part) for part in first["loc"] if part not in (action_name, "params")
        )
        raise InvalidActionError(
            f"Invalid params for action '{action_name}': "
            f"{location or 'params'}: {first['msg']}"
        ) from exc


def describe_error(exc: BaseException, action_name: str) -> str:
    return str(exc) or f"An unknown error occurred while processing {action_name}."


class ActionDispatcher:
    """Routes action requests to their handlers using an injected client."""

    def __init__(
        self,
        completion: CompletionClient,
        today: Callable[[], date] = date.today,
    ):
        self.context = ActionContext(completion=completion, today=today)

    async def dispatch(self, action_name: Any, params: Any) -> ActionResult:
        try:
            request = parse_action_request(action_name, params)
        except InvalidActionError as exc:
            logger.warning("Rejected AI action %r: %s", action_name, exc)
            return ActionResult.failure(str(exc), 400)

        registration = _HANDLERS[type(request)]
        try:
            value = await registration.handler(self.context, request.params)
        except Exception as exc:
            logger.exception("Error in AI Action '%s'", action_name)
            message = describe_error(exc, action_name)
            if registration.on_error is not None:
                return ActionResult.ok(registration.on_error(message))
            return ActionResult.failure(message, 500)

        logger.info("AI action '%s' completed", action_name)
        return ActionResult.ok(value)
