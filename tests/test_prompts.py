from datetime import date

import pytest

from japan_travel.ai.prompts import (
    GENERIC_LODGING_CLAUSE,
    NO_MUST_VISIT_CLAUSE,
    OSAKA_KYOTO_LODGING_CLAUSE,
    build_plan_prompt,
    build_search_prompt,
    lodging_clause,
    must_visit_clause,
)
from japan_travel.api.models.schemas import Destination, TripRequest


def _request(destination: Destination, places=None) -> TripRequest:
    return TripRequest(
        destination=destination,
        startDate=date(2025, 5, 1),
        endDate=date(2025, 5, 4),
        mustVisitPlaces=places or [],
    )


def test_osaka_kyoto_gets_split_lodging_clause():
    prompt = build_plan_prompt(_request(Destination.OSAKA_KYOTO, ["Osaka Castle"]))

    assert OSAKA_KYOTO_LODGING_CLAUSE in prompt
    assert GENERIC_LODGING_CLAUSE not in prompt


@pytest.mark.parametrize("destination", [Destination.TOKYO, Destination.FUKUOKA])
def test_other_destinations_get_generic_lodging_clause(destination):
    prompt = build_plan_prompt(_request(destination))

    assert GENERIC_LODGING_CLAUSE in prompt
    assert OSAKA_KYOTO_LODGING_CLAUSE not in prompt


def test_lodging_clause_rejects_unknown_destination():
    with pytest.raises(ValueError):
        lodging_clause("서울")  # type: ignore[arg-type]


def test_empty_must_visit_list_says_none_specified():
    prompt = build_plan_prompt(_request(Destination.TOKYO, []))

    assert NO_MUST_VISIT_CLAUSE in prompt
    assert "\n- \n" not in prompt


def test_blank_must_visit_entries_count_as_none():
    assert must_visit_clause(["  ", ""]) == NO_MUST_VISIT_CLAUSE


def test_must_visit_places_are_listed_in_order():
    assert must_visit_clause(["Osaka Castle", "Fushimi Inari"]) == (
        "Must-visit places (every one must appear in the itinerary):\n- Osaka Castle\n- Fushimi Inari"
    )


def test_plan_prompt_names_role_origin_airport_and_dates():
    prompt = build_plan_prompt(_request(Destination.FUKUOKA))

    assert prompt.startswith(
        "You are a professional travel planner. The traveler departs from "
        "Incheon International Airport (ICN), Seoul and arrives at FUK for a trip to 후쿠오카, Japan, "
        "from 2025-05-01 to 2025-05-04."
    )


def test_plan_prompt_states_output_contract():
    prompt = build_plan_prompt(_request(Destination.TOKYO))

    assert "at least 5 hotels and at least 5 restaurants" in prompt
    assert "sort each recommendation list by rating, highest first" in prompt
    assert "cover every must-visit place" in prompt
    assert "no markdown code fences" in prompt
    assert '"hotelRecommendations"' in prompt


def test_plan_prompt_is_deterministic():
    request = _request(Destination.OSAKA_KYOTO, ["Osaka Castle"])

    assert build_plan_prompt(request) == build_plan_prompt(request)


def test_search_prompt_embeds_query_verbatim():
    assert build_search_prompt('JR 패스 "전국판" 가격?') == (
        'Answer this question about traveling in Japan concisely, in Korean: "JR 패스 "전국판" 가격?"'
    )
