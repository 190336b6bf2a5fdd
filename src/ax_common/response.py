"""Error response body.

Successful endpoints return their resource directly (a Market, a list of
Bets, ...). Every error uses this shape:
{
    "error": "Market not found",
    "code": 3001
}
"""

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    error: str
    code: int


def error_response(code: int, message: str) -> ErrorResponse:
    return ErrorResponse(error=message, code=code)
