import pytest
from conftest import StubOpenAI, make_saved_plan_dict, text_response

from japan_travel.api.models.schemas import (
    DeletePlanAction,
    GeneratePlanAction,
    GetPlansAction,
    SavePlanAction,
    SearchInfoAction,
    SearchInfoResult,
)
from japan_travel.core.errors import ValidationError
from japan_travel.domain.repositories import PlanStore
from japan_travel.domain.services.dispatcher import Dispatcher, parse_action
from japan_travel.domain.services.prompt_engine import PromptEngine


@pytest.mark.parametrize(
    "body, expected",
    [
        ({"action": "getPlans"}, GetPlansAction),
        ({"action": "getPlans", "payload": {}}, GetPlansAction),
        ({"action": "savePlan", "payload": make_saved_plan_dict(1)}, SavePlanAction),
        ({"action": "deletePlan", "payload": {"planId": 1}}, DeletePlanAction),
        (
            {
                "action": "generatePlan",
                "payload": {"destination": "도쿄", "startDate": "2025-05-01", "endDate": "2025-05-01"},
            },
            GeneratePlanAction,
        ),
        ({"action": "searchInfo", "payload": {"query": "q"}}, SearchInfoAction),
    ],
)
def test_parse_action_picks_variant(body, expected):
    assert isinstance(parse_action(body), expected)


@pytest.mark.parametrize(
    "body",
    [{"action": "nope"}, {"payload": {}}, {"action": ["getPlans"]}, {"action": {}}, ["getPlans"], None],
)
def test_parse_action_rejects_unknown_envelopes(body):
    with pytest.raises(ValidationError) as exc_info:
        parse_action(body)
    assert exc_info.value.detail == "Invalid action"


def test_parse_action_reports_bad_field():
    with pytest.raises(ValidationError) as exc_info:
        parse_action({"action": "searchInfo", "payload": {"query": ""}})
    assert "payload.query" in exc_info.value.detail


async def test_plan_actions_go_to_store_and_skip_provider(backend):
    provider = StubOpenAI()
    dispatcher = Dispatcher(PlanStore(backend), PromptEngine(provider, "m", "m"))

    saved = await dispatcher.dispatch(parse_action({"action": "savePlan", "payload": make_saved_plan_dict(9)}))
    listed = await dispatcher.dispatch(parse_action({"action": "getPlans"}))

    assert [p.id for p in saved] == [9]
    assert listed == saved
    assert provider.calls == []


async def test_search_action_wraps_answer(backend):
    dispatcher = Dispatcher(PlanStore(backend), PromptEngine(StubOpenAI(text_response("답변")), "m", "m"))

    result = await dispatcher.dispatch(parse_action({"action": "searchInfo", "payload": {"query": "q"}}))

    assert result == SearchInfoResult(result="답변")
