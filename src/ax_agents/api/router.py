"""ax_agents REST endpoints.

POST /agents/{story|admissions|technical|authenticity}  — one specialist
POST /agents/orchestrate                                — all four + synthesis
POST /agents/extract-stories                            — story threads from transcript
POST /agents/calculate-odds                             — admission probability 1-100
POST /activities/generate                               — activities/honors from transcript
POST /voice/interview                                   — next advisor reply
"""

from typing import Annotated, Literal

from fastapi import APIRouter, Depends

from src.ax_agents.api.dependencies import get_agent_service
from src.ax_agents.application.schemas import (
    ActivitiesResponse,
    AgentFeedback,
    EssayRequest,
    InterviewRequest,
    InterviewResponse,
    MultiAgentAnalysis,
    OddsRequest,
    OddsResponse,
    StoryThreadsResponse,
    TranscriptRequest,
)
from src.ax_agents.application.service import AgentService

router = APIRouter(prefix="/agents", tags=["agents"])
activities_router = APIRouter(prefix="/activities", tags=["activities"])
voice_router = APIRouter(prefix="/voice", tags=["voice"])

Agents = Annotated[AgentService, Depends(get_agent_service)]


@router.post("/orchestrate", response_model=MultiAgentAnalysis)
async def orchestrate(req: EssayRequest, agents: Agents) -> MultiAgentAnalysis:
    return await agents.run_multi_agent_analysis(req.essay)


@router.post("/extract-stories", response_model=StoryThreadsResponse)
async def extract_stories(req: TranscriptRequest, agents: Agents) -> StoryThreadsResponse:
    return await agents.extract_story_threads(req.transcript)


@router.post("/calculate-odds", response_model=OddsResponse)
async def calculate_odds(req: OddsRequest, agents: Agents) -> OddsResponse:
    odds = await agents.calculate_initial_odds(req.profile, req.school_name)
    return OddsResponse(odds=odds)


@router.post("/{agent_type}", response_model=AgentFeedback)
async def run_single_agent(
    agent_type: Literal["story", "admissions", "technical", "authenticity"],
    req: EssayRequest,
    agents: Agents,
) -> AgentFeedback:
    return await agents.run_agent(agent_type, req.essay)


@activities_router.post("/generate", response_model=ActivitiesResponse)
async def generate_activities(req: TranscriptRequest, agents: Agents) -> ActivitiesResponse:
    return await agents.generate_activities(req.transcript)


@voice_router.post("/interview", response_model=InterviewResponse)
async def interview(req: InterviewRequest, agents: Agents) -> InterviewResponse:
    reply = await agents.interview_reply(req.message, req.history)
    return InterviewResponse(reply=reply)
