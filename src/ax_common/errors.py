"""Unified error codes and custom exceptions.

Error code ranges:
  3xxx: Market
  4xxx: Bet / request arguments
  6xxx: Agents (upstream model)
  9xxx: System
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 3xxx: Market ---

class MarketNotFoundError(AppError):
    def __init__(self, market_id: str) -> None:
        self.market_id = market_id
        super().__init__(3001, "Market not found", 404)


class MarketNotOpenError(AppError):
    def __init__(self, market_id: str) -> None:
        self.market_id = market_id
        super().__init__(3002, "Market is not open for betting", 400)


class MarketAlreadyResolvedError(AppError):
    def __init__(self, market_id: str) -> None:
        self.market_id = market_id
        super().__init__(3003, f"Market already resolved: {market_id}", 409)


class MarketNotClosableError(AppError):
    def __init__(self, market_id: str, status: str) -> None:
        super().__init__(3004, f"Market {market_id} in status {status} cannot be closed", 400)


# --- 4xxx: Bet / arguments ---

class InvalidArgumentError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(4001, detail, 400)


# --- 6xxx: Agents ---

class AgentOutputError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(6001, detail, 502)


class LLMUnavailableError(AppError):
    def __init__(self, detail: str = "Language model is unavailable") -> None:
        super().__init__(6002, detail, 503)


# --- 9xxx: System ---

class InternalError(AppError):
    def __init__(self, detail: str = "Something went wrong!") -> None:
        super().__init__(9002, detail, 500)
