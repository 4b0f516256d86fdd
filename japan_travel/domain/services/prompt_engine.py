from __future__ import annotations

import logging
from typing import Optional

from openai import AsyncOpenAI, OpenAIError

from japan_travel.ai.plan_graph import GenerationMode, build_plan_graph
from japan_travel.ai.prompts import build_search_prompt
from japan_travel.api.models.schemas import TravelPlan, TripRequest
from japan_travel.core.errors import ConfigurationError, UpstreamError

logger = logging.getLogger(__name__)


class PromptEngine:
    """Turns trip parameters into a typed TravelPlan and answers free-form travel questions.

    The provider client is injected; when it is None every operation fails with
    ConfigurationError before anything is sent.
    """

    def __init__(
        self,
        client: Optional[AsyncOpenAI],
        plan_model: str,
        search_model: str,
        mode: GenerationMode = "structured",
    ):
        self.client = client
        self.plan_model = plan_model
        self.search_model = search_model
        self._graph = build_plan_graph(client, plan_model, mode) if client is not None else None

    def _require_client(self) -> AsyncOpenAI:
        if self.client is None:
            logger.error("OPENAI_API_KEY is missing; refusing AI request")
            raise ConfigurationError()
        return self.client

    async def generate_plan(self, request: TripRequest) -> TravelPlan:
        self._require_client()
        result = await self._graph.ainvoke(
            {"request": request, "prompt": "", "content": None, "tool_arguments": None, "plan": None}
        )
        plan: TravelPlan = result["plan"]
        logger.info(
            "Generated plan '%s' with %d days for %s", plan.tripTitle, len(plan.dailyItinerary), request.destination
        )
        return plan

    async def search_info(self, query: str) -> str:
        client = self._require_client()
        try:
            resp = await client.chat.completions.create(
                model=self.search_model,
                messages=[{"role": "user", "content": build_search_prompt(query)}],
            )
        except OpenAIError as exc:
            logger.warning("Search call failed: %s", exc)
            raise UpstreamError(str(exc) or None) from exc
        return resp.choices[0].message.content or ""
