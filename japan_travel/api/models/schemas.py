from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Annotated, List, Literal, Union

from pydantic import BaseModel, Field, model_validator

# ---------- Destination ----------


class Destination(str, Enum):
    OSAKA_KYOTO = "오사카 & 교토"
    TOKYO = "도쿄"
    FUKUOKA = "후쿠오카"


DESTINATION_AIRPORTS = {
    Destination.OSAKA_KYOTO: "KIX",  # 간사이 국제공항
    Destination.TOKYO: "NRT",  # 나리타 국제공항
    Destination.FUKUOKA: "FUK",  # 후쿠오카 공항
}


class DestinationInfo(BaseModel):
    name: Destination
    airport: str


# ---------- TravelPlan ----------


class ScheduleItem(BaseModel):
    time: str
    activity: str
    description: str


class DailyPlan(BaseModel):
    day: str
    date: date
    theme: str
    schedule: List[ScheduleItem]


class Recommendation(BaseModel):
    name: str
    area: str
    rating: float = Field(ge=0, le=5)
    notes: str


class HotelRecommendation(Recommendation):
    priceRange: str


class TravelPlan(BaseModel):
    tripTitle: str
    dailyItinerary: List[DailyPlan]
    hotelRecommendations: List[HotelRecommendation]
    transportationGuide: str
    restaurantRecommendations: List[Recommendation]


class SavedPlan(BaseModel):
    id: int
    plan: TravelPlan
    destination: Destination
    startDate: date
    endDate: date


# ---------- Action payloads ----------


class TripRequest(BaseModel):
    destination: Destination
    startDate: date
    endDate: date
    mustVisitPlaces: List[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_date_range(self) -> "TripRequest":
        if self.startDate > self.endDate:
            raise ValueError("startDate must not be after endDate")
        return self


class DeletePlanPayload(BaseModel):
    planId: int


class SearchInfoPayload(BaseModel):
    query: str = Field(min_length=1)


class SearchInfoResult(BaseModel):
    result: str


# ---------- Action envelope ----------


class GetPlansAction(BaseModel):
    action: Literal["getPlans"]
    payload: dict | None = None


class SavePlanAction(BaseModel):
    action: Literal["savePlan"]
    payload: SavedPlan


class DeletePlanAction(BaseModel):
    action: Literal["deletePlan"]
    payload: DeletePlanPayload


class GeneratePlanAction(BaseModel):
    action: Literal["generatePlan"]
    payload: TripRequest


class SearchInfoAction(BaseModel):
    action: Literal["searchInfo"]
    payload: SearchInfoPayload


ActionRequest = Annotated[
    Union[GetPlansAction, SavePlanAction, DeletePlanAction, GeneratePlanAction, SearchInfoAction],
    Field(discriminator="action"),
]

ACTION_NAMES = frozenset({"getPlans", "savePlan", "deletePlan", "generatePlan", "searchInfo"})
