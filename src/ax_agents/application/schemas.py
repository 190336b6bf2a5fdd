"""Pydantic schemas for the agent endpoints (camelCase on the wire)."""

from typing import Annotated, Any, Literal

from pydantic import BaseModel, StringConstraints

from src.ax_agents.domain.activities import ActivityItem, HonorItem
from src.ax_common.schemas import CamelModel

RequiredText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class EssayRequest(CamelModel):
    essay: RequiredText


class TranscriptRequest(CamelModel):
    transcript: RequiredText


class ExtracurricularSummary(CamelModel):
    category: str
    tier: str
    leadership: bool = False


class Demographics(CamelModel):
    state: str = ""
    first_gen: bool = False
    urm: bool = False


class ApplicantProfile(CamelModel):
    gpa: float
    test_score: int | None = None
    test_type: str = ""
    ap_count: int = 0
    ec_summary: list[ExtracurricularSummary] = []
    demographics: Demographics = Demographics()
    essay_score: int = 0


class OddsRequest(CamelModel):
    profile: ApplicantProfile
    school_name: RequiredText


class HistoryTurn(CamelModel):
    role: Literal["user", "assistant"]
    text: str


class InterviewRequest(CamelModel):
    message: RequiredText
    history: list[HistoryTurn] = []


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class AgentFeedback(CamelModel):
    type: str
    feedback: str
    score: int | None = None


class MultiAgentAnalysis(CamelModel):
    story: AgentFeedback
    admissions: AgentFeedback
    technical: AgentFeedback
    authenticity: AgentFeedback
    synthesis: AgentFeedback


class StoryThreadsResponse(CamelModel):
    threads: list[dict[str, Any]]


class OddsResponse(CamelModel):
    odds: int


class ActivitiesResponse(BaseModel):
    activities: list[ActivityItem]
    honors: list[HonorItem]


class InterviewResponse(CamelModel):
    reply: str
