from typing import List

from fastapi import APIRouter

from japan_travel.api.models.schemas import DESTINATION_AIRPORTS, Destination, DestinationInfo

router = APIRouter(prefix="/meta", tags=["meta"])


@router.get("/destinations", response_model=List[DestinationInfo])
async def list_destinations():
    return [DestinationInfo(name=dest, airport=DESTINATION_AIRPORTS[dest]) for dest in Destination]
