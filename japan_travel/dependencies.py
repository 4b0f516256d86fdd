from fastapi import Depends, Request

from japan_travel.domain.repositories import PlanStore
from japan_travel.domain.services.dispatcher import Dispatcher
from japan_travel.domain.services.prompt_engine import PromptEngine


def get_plan_store(request: Request) -> PlanStore:
    return request.app.state.plan_store


def get_prompt_engine(request: Request) -> PromptEngine:
    return request.app.state.prompt_engine


def get_dispatcher(
    store: PlanStore = Depends(get_plan_store),
    engine: PromptEngine = Depends(get_prompt_engine),
) -> Dispatcher:
    return Dispatcher(store=store, engine=engine)


__all__ = [
    "get_plan_store",
    "get_prompt_engine",
    "get_dispatcher",
]
