"""AgentService — essay feedback, story mining, odds estimates, interviews.

Every agent is one call to the configured LLM client; the service owns the
prompts and the tolerant parsing of whatever comes back.
"""

import asyncio
import json
import logging
from typing import Any

from src.ax_agents.application import prompts
from src.ax_agents.application.schemas import (
    ActivitiesResponse,
    AgentFeedback,
    ApplicantProfile,
    HistoryTurn,
    MultiAgentAnalysis,
    StoryThreadsResponse,
)
from src.ax_agents.domain.activities import normalize_activities, normalize_honors
from src.ax_agents.domain.llm import LLMClientProtocol
from src.ax_agents.domain.parsing import (
    DEFAULT_ODDS_ESTIMATE,
    as_text,
    extract_authenticity_score,
    extract_first_json,
    normalize_agent_reply,
    parse_json_reply,
    parse_odds_estimate,
)
from src.ax_common.errors import AgentOutputError, AppError, InvalidArgumentError

logger = logging.getLogger(__name__)

INTERVIEW_HISTORY_TURNS = 10


class AgentService:
    def __init__(self, llm: LLMClientProtocol, max_tokens: int = 1500) -> None:
        self._llm = llm
        self._max_tokens = max_tokens

    async def run_agent(
        self, agent_type: str, text: str, additional_context: str | None = None
    ) -> AgentFeedback:
        system = prompts.AGENT_PROMPTS.get(agent_type)
        if system is None:
            raise InvalidArgumentError(f"Unknown agent: {agent_type}")

        user = f"Analyze this college essay:\n\n{text}"
        if additional_context:
            user += f"\n\nAdditional context:\n{additional_context}"

        logger.info("agent %s running, input length=%d", agent_type, len(text))
        feedback = await self._llm.complete(system, user, self._max_tokens)

        score = None
        if agent_type == "authenticity":
            score = extract_authenticity_score(feedback)
        return AgentFeedback(type=agent_type, feedback=feedback, score=score)

    async def run_multi_agent_analysis(self, essay: str) -> MultiAgentAnalysis:
        """Four specialists concurrently, then one synthesis over their output."""
        story, admissions, technical, authenticity = await asyncio.gather(
            *(self.run_agent(a, essay) for a in prompts.SPECIALIST_AGENTS)
        )
        context = "\n\n".join(
            f"{fb.type.capitalize()} Agent Feedback:\n{fb.feedback}"
            for fb in (story, admissions, technical, authenticity)
        )
        synthesis = await self.run_agent("synthesis", essay, context)
        return MultiAgentAnalysis(
            story=story,
            admissions=admissions,
            technical=technical,
            authenticity=authenticity,
            synthesis=synthesis,
        )

    async def extract_story_threads(self, transcript: str) -> StoryThreadsResponse:
        text = await self._llm.complete(
            prompts.STORY_EXTRACTION_SYSTEM,
            prompts.STORY_EXTRACTION_TEMPLATE.format(transcript=transcript),
            2000,
        )
        parsed = extract_first_json(text)
        threads = parsed.get("threads") if isinstance(parsed, dict) else None
        if not isinstance(threads, list):
            return StoryThreadsResponse(threads=[])
        return StoryThreadsResponse(threads=[t for t in threads if isinstance(t, dict)])

    async def calculate_initial_odds(self, profile: ApplicantProfile, school_name: str) -> int:
        """Model estimate in [1, 100]; falls back to 50 when the model fails."""
        user = prompts.ODDS_TEMPLATE.format(
            school_name=school_name,
            gpa=profile.gpa,
            test_score=profile.test_score,
            test_type=profile.test_type,
            ap_count=profile.ap_count,
            ec_summary=json.dumps([ec.model_dump() for ec in profile.ec_summary]),
            essay_score=profile.essay_score,
            state=profile.demographics.state,
            first_gen=str(profile.demographics.first_gen).lower(),
            urm=str(profile.demographics.urm).lower(),
        )
        try:
            text = await self._llm.complete(None, user, 500)
        except AppError as e:
            logger.error("odds estimate failed for %s: %s", school_name, e.message)
            return DEFAULT_ODDS_ESTIMATE
        return parse_odds_estimate(text)

    async def generate_activities(self, transcript: str) -> ActivitiesResponse:
        result = await self._llm.complete(
            prompts.AGENT_PROMPTS["activities"],
            prompts.ACTIVITIES_TEMPLATE.format(transcript=transcript),
            self._max_tokens,
        )
        parsed = parse_json_reply(as_text(result))
        if parsed is None:
            raise AgentOutputError("Model did not return valid JSON")

        activities = normalize_activities(parsed)
        honors = normalize_honors(parsed)
        if not activities and not honors:
            raise AgentOutputError("Model returned JSON but no activities or honors found")
        return ActivitiesResponse(activities=activities, honors=honors)

    async def interview_reply(self, message: str, history: list[HistoryTurn]) -> str:
        turns = history[-INTERVIEW_HISTORY_TURNS:]
        formatted = "\n".join(
            f"{'Student' if t.role == 'user' else 'Advisor'}: {t.text}" for t in turns
        )
        user = prompts.INTERVIEW_TEMPLATE.format(
            history=formatted or "(none)", message=message
        )
        text = await self._llm.complete(
            prompts.AGENT_PROMPTS["admissions"], user, self._max_tokens
        )
        # Models sometimes answer with a JSON object despite the plain-text rule
        result: Any = text
        if text.lstrip().startswith("{"):
            parsed = parse_json_reply(text)
            if isinstance(parsed, dict):
                result = parsed
        return normalize_agent_reply(result) or prompts.INTERVIEW_FALLBACK_REPLY
