from typing import Any, Dict

from fastapi import HTTPException, status

GENERIC_ERROR_MESSAGE = "요청 처리 중 오류 발생"


class APIError(HTTPException):
    def __init__(self, status_code: int, code: str, message: str):
        super().__init__(status_code=status_code, detail=message)
        self.code = code


class ConfigurationError(APIError):
    """A required server setting is missing. The caller only sees a generic message."""

    def __init__(self, message: str = "서버 설정 오류"):
        super().__init__(status.HTTP_500_INTERNAL_SERVER_ERROR, "CONFIGURATION_ERROR", message)


class ValidationError(APIError):
    def __init__(self, message: str):
        super().__init__(status.HTTP_400_BAD_REQUEST, "VALIDATION_ERROR", message)


class NotFoundError(APIError):
    """A blob is absent. The plan store treats it as not observed, so it never reaches the caller."""

    def __init__(self, message: str = "Not found"):
        super().__init__(status.HTTP_404_NOT_FOUND, "NOT_FOUND", message)


class GenerationParseError(APIError):
    def __init__(self, message: str = "여행 계획을 해석하지 못했습니다. 잠시 후 다시 시도해주세요."):
        super().__init__(status.HTTP_500_INTERNAL_SERVER_ERROR, "GENERATION_PARSE_ERROR", message)


class UpstreamError(APIError):
    def __init__(self, message: str | None = None):
        super().__init__(
            status.HTTP_500_INTERNAL_SERVER_ERROR, "UPSTREAM_ERROR", message or GENERIC_ERROR_MESSAGE
        )


def error_content(message: str) -> Dict[str, Any]:
    return {"error": message}
