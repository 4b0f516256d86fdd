import json
from datetime import date, timedelta
from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import pytest
from fastapi.testclient import TestClient

from japan_travel.ai.prompts import PLAN_TOOL_NAME
from japan_travel.core.config import Settings
from japan_travel.external.blob_storage import InMemoryBlobBackend
from japan_travel.main import create_app


def make_plan_dict(days: int = 3, start: date = date(2025, 5, 1), place: str = "Senso-ji") -> Dict[str, Any]:
    return {
        "tripTitle": "도쿄 3박 4일 여행",
        "dailyItinerary": [
            {
                "day": f"Day {i + 1}",
                "date": (start + timedelta(days=i)).isoformat(),
                "theme": "시내 탐방",
                "schedule": [
                    {"time": "09:00", "activity": place if i == 0 else "산책", "description": "오전 일정"},
                    {"time": "13:00", "activity": "점심", "description": "현지 식당"},
                ],
            }
            for i in range(days)
        ],
        "hotelRecommendations": [
            {"name": f"Hotel {i}", "area": "Shinjuku", "rating": 5 - i * 0.5, "notes": "역 근처", "priceRange": "₩₩"}
            for i in range(5)
        ],
        "transportationGuide": "스이카 카드를 이용하세요.",
        "restaurantRecommendations": [
            {"name": f"Restaurant {i}", "area": "Ginza", "rating": 4.8 - i * 0.3, "notes": "예약 권장"}
            for i in range(5)
        ],
    }


def make_saved_plan_dict(plan_id: int, destination: str = "도쿄", **plan_kwargs) -> Dict[str, Any]:
    return {
        "id": plan_id,
        "plan": make_plan_dict(**plan_kwargs),
        "destination": destination,
        "startDate": "2025-05-01",
        "endDate": "2025-05-03",
    }


class StubCompletions:
    def __init__(self, responses: List[Any]):
        self.responses = list(responses)
        self.calls: List[Dict[str, Any]] = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


class StubOpenAI:
    """Shaped like AsyncOpenAI as far as chat.completions.create goes."""

    def __init__(self, *responses: Any):
        self.completions = StubCompletions(list(responses))
        self.chat = SimpleNamespace(completions=self.completions)

    @property
    def calls(self) -> List[Dict[str, Any]]:
        return self.completions.calls


def text_response(content: Optional[str]):
    message = SimpleNamespace(content=content, tool_calls=None)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def tool_response(arguments: Dict[str, Any], name: str = PLAN_TOOL_NAME):
    call = SimpleNamespace(
        id="call_1", type="function", function=SimpleNamespace(name=name, arguments=json.dumps(arguments))
    )
    message = SimpleNamespace(content=None, tool_calls=[call])
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


@pytest.fixture
def plan_dict():
    return make_plan_dict()


@pytest.fixture
def settings():
    return Settings(_env_file=None, openai_api_key="test-key", blob_backend="memory")


@pytest.fixture
def backend():
    return InMemoryBlobBackend()


@pytest.fixture
def make_client(settings, backend):
    def _make(provider=None, app_settings: Optional[Settings] = None) -> TestClient:
        app = create_app(settings=app_settings or settings, client=provider, backend=backend)
        return TestClient(app)

    return _make
