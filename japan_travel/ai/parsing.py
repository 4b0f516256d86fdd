import logging
import re

from pydantic import ValidationError as PydanticValidationError

from japan_travel.api.models.schemas import TravelPlan
from japan_travel.core.errors import GenerationParseError

logger = logging.getLogger(__name__)

MIN_RECOMMENDATIONS = 5

_FENCE_RE = re.compile(r"^```[\w-]*[ \t]*\n?(.*?)\n?```$", re.DOTALL)


def strip_json_fence(text: str) -> str:
    """Remove one wrapping ```lang ... ``` fence. Anything else is returned trimmed but unchanged."""
    stripped = text.strip()
    match = _FENCE_RE.match(stripped)
    if match:
        return match.group(1).strip()
    return stripped


def parse_travel_plan(raw: str | bytes) -> TravelPlan:
    text = raw.decode("utf-8") if isinstance(raw, bytes) else raw
    try:
        plan = TravelPlan.model_validate_json(strip_json_fence(text))
    except PydanticValidationError as exc:
        logger.error("Model output is not a valid travel plan: %s\nRaw output:\n%s", exc, text)
        raise GenerationParseError() from exc
    check_recommendation_counts(plan)
    return plan


def check_recommendation_counts(plan: TravelPlan) -> None:
    hotels = len(plan.hotelRecommendations)
    restaurants = len(plan.restaurantRecommendations)
    if hotels < MIN_RECOMMENDATIONS or restaurants < MIN_RECOMMENDATIONS:
        logger.error(
            "Generated plan has %d hotels and %d restaurants; at least %d of each are required",
            hotels,
            restaurants,
            MIN_RECOMMENDATIONS,
        )
        raise GenerationParseError()
