"""
HTTP routes for the AI action API.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from backend.actions import ActionDispatcher
from backend.dependencies import get_dispatcher
from backend.schemas import ActionEnvelope
from shared.api import AI_ENDPOINT_PATH

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(AI_ENDPOINT_PATH)
async def run_ai_action(
    payload: ActionEnvelope,
    dispatcher: ActionDispatcher = Depends(get_dispatcher),
):
    """
    Run one AI action. The body is `{action, params}`; the response is the
    action's JSON result, or `{error}` with a 400/500 status.
    """
    result = await dispatcher.dispatch(payload.action, payload.params)
    return JSONResponse(status_code=result.status_code, content=result.to_json())
