from fastapi import APIRouter, Depends, Request, Response, status

from japan_travel.core.errors import ValidationError
from japan_travel.dependencies import get_dispatcher
from japan_travel.domain.services.dispatcher import Dispatcher, parse_action

router = APIRouter(tags=["japan-travel"])


@router.post("/japan-travel")
async def handle_action(request: Request, dispatcher: Dispatcher = Depends(get_dispatcher)):
    try:
        body = await request.json()
    except ValueError:
        # JSONDecodeError and UnicodeDecodeError
        raise ValidationError("요청 본문이 올바른 JSON이 아닙니다.")
    return await dispatcher.dispatch(parse_action(body))


@router.options("/japan-travel")
async def preflight():
    return Response(status_code=status.HTTP_200_OK)
