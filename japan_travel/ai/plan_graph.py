from __future__ import annotations

import json
import logging
from typing import Any, Dict, Literal, Optional, TypedDict

from langgraph.graph import END, StateGraph
from openai import AsyncOpenAI, OpenAIError

from japan_travel.ai.parsing import check_recommendation_counts, parse_travel_plan
from japan_travel.ai.prompts import PLAN_SYSTEM_PROMPT, PLAN_TOOL_NAME, build_plan_prompt
from japan_travel.api.models.schemas import TravelPlan, TripRequest
from japan_travel.core.errors import GenerationParseError, UpstreamError

logger = logging.getLogger(__name__)

GenerationMode = Literal["structured", "text"]


class PlanState(TypedDict):
    request: TripRequest
    prompt: str
    content: Optional[str]
    tool_arguments: Optional[str]
    plan: Optional[TravelPlan]


def plan_tool() -> Dict[str, Any]:
    return {
        "type": "function",
        "function": {
            "name": PLAN_TOOL_NAME,
            "description": "Return the complete travel plan for the requested trip.",
            "parameters": TravelPlan.model_json_schema(),
        },
    }


async def build_prompt(state: PlanState) -> Dict[str, Any]:
    return {"prompt": build_plan_prompt(state["request"])}


def _make_request_plan(client: AsyncOpenAI, model: str, mode: GenerationMode):
    async def request_plan(state: PlanState) -> Dict[str, Any]:
        kwargs: Dict[str, Any] = {}
        if mode == "structured":
            kwargs["tools"] = [plan_tool()]
            kwargs["tool_choice"] = {"type": "function", "function": {"name": PLAN_TOOL_NAME}}
        try:
            resp = await client.chat.completions.create(
                model=model,
                messages=[
                    {"role": "system", "content": PLAN_SYSTEM_PROMPT},
                    {"role": "user", "content": state["prompt"]},
                ],
                **kwargs,
            )
        except OpenAIError as exc:
            logger.warning("Plan generation call failed: %s", exc)
            raise UpstreamError(str(exc) or None) from exc

        message = resp.choices[0].message
        tool_arguments = None
        for call in message.tool_calls or []:
            if call.function.name == PLAN_TOOL_NAME:
                tool_arguments = call.function.arguments
                break
        return {"content": message.content, "tool_arguments": tool_arguments}

    return request_plan


async def parse_plan(state: PlanState) -> Dict[str, Any]:
    arguments = state.get("tool_arguments")
    if arguments:
        try:
            plan = TravelPlan.model_validate(json.loads(arguments))
        except ValueError as exc:
            logger.error("Structured plan arguments are invalid: %s\nRaw arguments:\n%s", exc, arguments)
            raise GenerationParseError() from exc
        check_recommendation_counts(plan)
        return {"plan": plan}

    content = state.get("content")
    if not content:
        logger.error("Model returned neither a structured call nor text content")
        raise GenerationParseError()
    return {"plan": parse_travel_plan(content)}


def build_plan_graph(client: AsyncOpenAI, model: str, mode: GenerationMode = "structured"):
    builder = StateGraph(PlanState)
    builder.add_node("build_prompt", build_prompt)
    builder.add_node("request_plan", _make_request_plan(client, model, mode))
    builder.add_node("parse_plan", parse_plan)

    builder.set_entry_point("build_prompt")
    builder.add_edge("build_prompt", "request_plan")
    builder.add_edge("request_plan", "parse_plan")
    builder.add_edge("parse_plan", END)
    return builder.compile()
