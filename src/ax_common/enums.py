"""Global enums — values must match the DB CHECK constraints in alembic/versions."""

from enum import Enum


class MarketStatus(str, Enum):
    OPEN = "open"
    CLOSED = "closed"
    RESOLVED = "resolved"


class Prediction(str, Enum):
    YES = "yes"
    NO = "no"


class MarketResult(str, Enum):
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class DecisionType(str, Enum):
    """Application round the market is about."""
    EA = "EA"
    ED = "ED"
    ED2 = "ED2"
    REA = "REA"
    RD = "RD"
