from __future__ import annotations

import logging
from typing import Any, List, Union, assert_never

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from japan_travel.api.models.schemas import (
    ACTION_NAMES,
    ActionRequest,
    DeletePlanAction,
    GeneratePlanAction,
    GetPlansAction,
    SavedPlan,
    SavePlanAction,
    SearchInfoAction,
    SearchInfoResult,
    TravelPlan,
)
from japan_travel.core.errors import ValidationError
from japan_travel.domain.repositories import PlanStore
from japan_travel.domain.services.prompt_engine import PromptEngine

logger = logging.getLogger(__name__)

_ACTION_ADAPTER: TypeAdapter[ActionRequest] = TypeAdapter(ActionRequest)

DispatchResult = Union[List[SavedPlan], TravelPlan, SearchInfoResult]


def parse_action(body: Any) -> ActionRequest:
    """Validate a raw `{action, payload}` envelope into one of the typed actions."""
    action = body.get("action") if isinstance(body, dict) else None
    if not isinstance(action, str) or action not in ACTION_NAMES:
        logger.info("Rejected unknown action %r", action)
        raise ValidationError("Invalid action")
    try:
        return _ACTION_ADAPTER.validate_python(body)
    except PydanticValidationError as exc:
        first_error = exc.errors()[0]
        path = ".".join(str(item) for item in first_error.get("loc", ()) if item != body["action"])
        raise ValidationError(f"요청이 유효하지 않습니다: {path} - {first_error.get('msg')}") from exc


class Dispatcher:
    def __init__(self, store: PlanStore, engine: PromptEngine):
        self.store = store
        self.engine = engine

    async def dispatch(self, request: ActionRequest) -> DispatchResult:
        logger.info("Handling action %s", request.action)
        if isinstance(request, GetPlansAction):
            return await self.store.list_plans()
        if isinstance(request, SavePlanAction):
            return await self.store.save_plan(request.payload)
        if isinstance(request, DeletePlanAction):
            return await self.store.delete_plan(request.payload.planId)
        if isinstance(request, GeneratePlanAction):
            return await self.engine.generate_plan(request.payload)
        if isinstance(request, SearchInfoAction):
            return SearchInfoResult(result=await self.engine.search_info(request.payload.query))
        assert_never(request)
