"""
AI Intent Scoring
=================
Language-model classification of a lead's buying intent.

Flow per lead:
- Build a prompt from the offer, the lead profile and the rule breakdown
- Call the model (bounded retries, linear backoff)
- Parse "INTENT:" and "REASONING:" lines
- Map the intent to a score: High 50, Medium 30, Low 10, anything else 0

Failures never escape `analyze`: they are recorded as intent "error" with
score 0 so one bad call cannot abort a batch.
"""

import logging
import re
from typing import List, Optional, Tuple

from ..models.schemas import (
    Lead,
    Offer,
    AIIntent,
    AIScore,
    AIScoreResult,
    RuleScoreBreakdown,
)
from ..config.settings import AI_INTENT_SCORES
from ..llm.client import LLMClient, SamplingConfig
from ..llm.retry import RetryPolicy

logger = logging.getLogger(__name__)

INTENT_PATTERN = re.compile(r"INTENT:\s*\[?\s*(High|Medium|Low)\b", re.IGNORECASE)
REASONING_PATTERN = re.compile(r"REASONING:\s*(.*)", re.IGNORECASE)
NO_REASONING = "No reasoning provided."


def intent_to_score(intent: Optional[str]) -> int:
    """Map an intent label to its score, case-insensitively; unknown labels score 0"""
    return AI_INTENT_SCORES.get((intent or "").strip().lower(), 0)


def parse_response(response: str) -> Tuple[AIIntent, str]:
    """Extract the intent label and the reasoning line from a model reply"""
    intent_match = INTENT_PATTERN.search(response or "")
    reasoning_match = REASONING_PATTERN.search(response or "")

    intent = AIIntent(intent_match.group(1).lower()) if intent_match else AIIntent.UNKNOWN
    reasoning = reasoning_match.group(1).strip() if reasoning_match else ""
    return intent, reasoning or NO_REASONING


class AIScorer:
    """
    Scores lead intent with a language model.
    """

    def __init__(
        self,
        client: Optional[LLMClient] = None,
        retry_policy: Optional[RetryPolicy] = None,
        sampling: Optional[SamplingConfig] = None,
    ):
        self.client = client or LLMClient()
        self.retry_policy = retry_policy or RetryPolicy()
        self.sampling = sampling or SamplingConfig()

    async def analyze(
        self,
        lead: Lead,
        offer: Offer,
        breakdown: Optional[RuleScoreBreakdown] = None,
    ) -> AIScoreResult:
        """
        Run the full AI analysis for one lead.

        Args:
            lead: Lead to analyze
            offer: Offer the lead is scored against
            breakdown: Rule breakdown used as context in the prompt

        Returns:
            AIScoreResult with score, intent, reasoning and logs
        """
        logs = []
        try:
            prompt = self.create_prompt(lead, offer, breakdown)
            logs.append("AI Prompt created.")

            response = await self._call_llm(prompt)
            logs.append("AI Response received.")

            intent, reasoning = parse_response(response)
            if intent is AIIntent.UNKNOWN:
                logger.info("Could not parse intent for lead %s", lead.id)
            score = intent_to_score(intent.value)
            logs.append(f"AI Intent: {intent.value}, AI Score: {score}")

            return AIScoreResult(score=score, intent=intent, reasoning=reasoning, logs=logs)

        except Exception as e:
            logger.error("Error during AI lead scoring for lead %s: %s", getattr(lead, "id", "?"), e)
            logs.append(f"Error during AI lead scoring: {e}")
            return AIScoreResult(
                score=0,
                intent=AIIntent.ERROR,
                reasoning=f"Error: {e}",
                logs=logs,
            )

    async def score_with_reasoning(
        self,
        lead: Lead,
        offer: Offer,
        breakdown: Optional[RuleScoreBreakdown] = None,
    ) -> AIScore:
        """Score and reasoning only"""
        result = await self.analyze(lead, offer, breakdown)
        return AIScore(score=result.score, reasoning=result.reasoning)

    async def analyze_batch(
        self,
        leads: List[Lead],
        offer: Offer,
        breakdowns: Optional[List[Optional[RuleScoreBreakdown]]] = None,
    ) -> List[AIScoreResult]:
        """Analyze leads one after another, pairing each with its breakdown"""
        breakdowns = breakdowns or [None] * len(leads)
        results = []
        for lead, breakdown in zip(leads, breakdowns):
            results.append(await self.analyze(lead, offer, breakdown))
        return results

    def create_prompt(
        self,
        lead: Lead,
        offer: Offer,
        breakdown: Optional[RuleScoreBreakdown] = None,
    ) -> str:
        """Build the intent-classification prompt"""
        breakdown = breakdown or RuleScoreBreakdown()

        if breakdown.role:
            role_context = f"{breakdown.role.category.value} ({breakdown.role.reasoning})"
        else:
            role_context = "unknown (no analysis)"

        if breakdown.industry:
            industry_context = f"{breakdown.industry.match_type.value} ({breakdown.industry.reasoning})"
        else:
            industry_context = "unknown (no analysis)"

        completeness = breakdown.completeness.percentage if breakdown.completeness else 0

        return f"""You are an expert B2B sales analyst. Analyze this prospect's buying intent for our offer.

OFFER DETAILS:
Product: {offer.name}
Value Propositions: {', '.join(offer.value_props)}
Ideal Use Cases: {', '.join(offer.ideal_use_cases)}

PROSPECT PROFILE:
Name: {lead.name or 'Unknown'}
Role: {lead.role or 'Unknown'}
Company: {lead.company or 'Unknown'}
Industry: {lead.industry or 'Unknown'}
Location: {lead.location or 'Unknown'}
LinkedIn Bio: {(lead.linkedin_bio or '').strip() or 'Not provided'}

RULE-BASED CONTEXT (pre-computed, trust these signals):
- Role Classification: {role_context}
- Industry Match: {industry_context}
- Profile Completeness: {completeness}%

TASK:
Classify the prospect's buying intent as High, Medium, or Low. Consider:
1. Role Relevance: decision-making power or influence over purchasing
2. Industry Fit: alignment with the ideal use cases
3. Pain Points: whether the bio or role suggests problems the product solves
4. Company Context: whether the company size/stage benefits from the solution
5. Timing Signals: growth, expansion or current challenges

RESPONSE FORMAT (exactly two lines):
INTENT: [High/Medium/Low]
REASONING: [1-2 sentences on the factors that drove the classification]

Example:
INTENT: High
REASONING: VP of Sales at a mid-market SaaS company whose bio mentions scaling outreach, so strong authority and clear pain point alignment."""

    async def _call_llm(self, prompt: str) -> str:
        """Call the model under the retry policy"""
        return await self.retry_policy.run(lambda: self.client.complete(prompt, self.sampling))
