"""
Pydantic schemas for the AI action API.

Field names follow the web client's JSON keys, so they are camelCase where
the client sends camelCase.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Optional, Union, get_args

from pydantic import BaseModel, Field, TypeAdapter


class ActionEnvelope(BaseModel):
    """Raw request body; the action is resolved by the dispatcher."""

    action: Optional[Any] = None
    params: Optional[dict] = None


class Task(BaseModel):
    name: str
    impact: Optional[int] = None
    due_date: Optional[str] = None
    completed: Optional[bool] = False
    goal_id: Optional[Union[int, str]] = None


class GoalWithProgress(BaseModel):
    name: str
    progress: Optional[Union[int, float]] = 0


class AppContextData(BaseModel):
    currentView: str
    tasks: list[Task] = Field(default_factory=list)
    goals: list[GoalWithProgress] = Field(default_factory=list)


class TaskSuggestionsParams(BaseModel):
    taskName: str


class MoreTagSuggestionsParams(BaseModel):
    taskName: str
    description: str = ""


class TaskBreakdownParams(BaseModel):
    goalName: str
    goalDescription: str = ""


class DevelopmentPlanParams(BaseModel):
    goal: str
    bookCount: int = Field(..., ge=0)
    channelCount: int = Field(..., ge=0)
    podcastCount: int = Field(..., ge=0)


class AlternativeResourceParams(BaseModel):
    goal: str
    resourceToReplace: str


class TaskPrioritizationParams(BaseModel):
    tasks: list[Task]


class GenerateContentParams(BaseModel):
    prompt: str


class GoalStrategyParams(BaseModel):
    goal: GoalWithProgress


class AssistantParams(BaseModel):
    query: str
    context: AppContextData


class TaskSuggestionsRequest(BaseModel):
    action: Literal["getTaskSuggestions"]
    params: TaskSuggestionsParams


class MoreTagSuggestionsRequest(BaseModel):
    action: Literal["getMoreTagSuggestions"]
    params: MoreTagSuggestionsParams


class TaskBreakdownRequest(BaseModel):
    action: Literal["getTaskBreakdownForGoal"]
    params: TaskBreakdownParams


class DevelopmentPlanRequest(BaseModel):
    action: Literal["getDevelopmentPlan"]
    params: DevelopmentPlanParams


class AlternativeResourceRequest(BaseModel):
    action: Literal["getAlternativeResource"]
    params: AlternativeResourceParams


class TaskPrioritizationRequest(BaseModel):
    action: Literal["getTaskPrioritization"]
    params: TaskPrioritizationParams


class GenerateContentRequest(BaseModel):
    action: Literal["generateContent"]
    params: GenerateContentParams


class GoalStrategyRequest(BaseModel):
    action: Literal["getGoalStrategy"]
    params: GoalStrategyParams


class AssistantRequest(BaseModel):
    action: Literal["getAiAssistantResponse"]
    params: AssistantParams


ACTION_REQUEST_TYPES = (
    TaskSuggestionsRequest,
    MoreTagSuggestionsRequest,
    TaskBreakdownRequest,
    DevelopmentPlanRequest,
    AlternativeResourceRequest,
    TaskPrioritizationRequest,
    GenerateContentRequest,
    GoalStrategyRequest,
    AssistantRequest,
)

ActionRequest = Annotated[
    Union[
        TaskSuggestionsRequest,
        MoreTagSuggestionsRequest,
        TaskBreakdownRequest,
        DevelopmentPlanRequest,
        AlternativeResourceRequest,
        TaskPrioritizationRequest,
        GenerateContentRequest,
        GoalStrategyRequest,
        AssistantRequest,
    ],
    Field(discriminator="action"),
]

action_request_adapter: TypeAdapter[ActionRequest] = TypeAdapter(ActionRequest)


def action_name(request_type: type[BaseModel]) -> str:
    """The literal action tag declared by a request variant."""
    return get_args(request_type.model_fields["action"].annotation)[0]


ACTION_NAMES = frozenset(action_name(t) for t in ACTION_REQUEST_TYPES)


class ErrorResponse(BaseModel):
    error: str
