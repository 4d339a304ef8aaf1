"""
Lead Intent Scoring Engine - Main Orchestrator
==============================================
Scores a batch of stored leads against a stored offer:
  Rule Scoring (0-50) → AI Intent Scoring (0-50) → Final Intent

Key behaviours:
- Offer and lead resolution happen before any scoring; a missing id
  aborts the whole batch
- The AI prompt is grounded in the lead's rule breakdown, so rule
  scoring always completes first for each lead
- AI failures are isolated per lead and never abort the batch
"""

import asyncio
import logging
import time
from datetime import datetime, timezone
from typing import Optional, List, Dict, Any

from .models.schemas import (
    AIIntent,
    Lead,
    Offer,
    IntentLabel,
    ScoringResult,
    ResultsReport,
    ResultsSummary,
)
from .config.settings import INTENT_THRESHOLDS, DEFAULT_INTENT
from .errors import OfferNotFoundError, LeadsNotFoundError
from .storage.repositories import OfferRepository, LeadRepository, ResultRepository
from .stages.rule_scoring import RuleScorer
from .stages.ai_scoring import AIScorer

logger = logging.getLogger(__name__)


def calculate_final_intent(total_score: int) -> IntentLabel:
    """Map a combined 0-100 score to High (>=70), Medium (>=40) or Low"""
    for threshold, label in INTENT_THRESHOLDS:
        if total_score >= threshold:
            return IntentLabel(label)
    return IntentLabel(DEFAULT_INTENT)


def summarize_results(results: List[ScoringResult]) -> ResultsSummary:
    """Counts per intent and the average combined score (2 dp)"""
    total = len(results)
    average = sum(r.score for r in results) / total if total else 0
    return ResultsSummary(
        total_leads=total,
        high_intent=sum(1 for r in results if r.intent == IntentLabel.HIGH),
        medium_intent=sum(1 for r in results if r.intent == IntentLabel.MEDIUM),
        low_intent=sum(1 for r in results if r.intent == IntentLabel.LOW),
        average_score=round(average, 2),
    )


class LeadScoringEngine:
    """
    Orchestrates rule and AI scoring over the in-memory repositories.
    """

    def __init__(
        self,
        offers: Optional[OfferRepository] = None,
        leads: Optional[LeadRepository] = None,
        results: Optional[ResultRepository] = None,
        rule_scorer: Optional[RuleScorer] = None,
        ai_scorer: Optional[AIScorer] = None,
        max_concurrency: int = 1,
    ):
        """
        Initialize the scoring engine.

        Args:
            offers: Offer repository
            leads: Lead repository
            results: Result repository (cumulative across batches)
            rule_scorer: Rule-based scorer
            ai_scorer: Language-model scorer
            max_concurrency: Leads scored at once; 1 keeps the batch strictly sequential
        """
        self.offers = offers or OfferRepository()
        self.leads = leads or LeadRepository()
        self.results = results or ResultRepository()
        self.rule_scorer = rule_scorer or RuleScorer()
        self.ai_scorer = ai_scorer or AIScorer()
        self.max_concurrency = max(1, max_concurrency)

        # Track statistics
        self.stats = {
            "batches": 0,
            "leads_scored": 0,
            "ai_errors": 0,
            "total_processing_time_ms": 0,
        }

    async def score_batch(self, offer_id: str, lead_ids: List[str]) -> List[ScoringResult]:
        """
        Score the given leads against one offer.

        Args:
            offer_id: Id of a stored offer
            lead_ids: Ids of stored leads

        Returns:
            One ScoringResult per lead, in request order

        Raises:
            OfferNotFoundError: the offer does not exist
            LeadsNotFoundError: one or more leads do not exist
        """
        start_time = time.time()

        offer = self.offers.get_by_id(offer_id)
        if offer is None:
            raise OfferNotFoundError(offer_id)

        leads = self.leads.get_by_ids(lead_ids)
        found = {lead.id for lead in leads}
        missing = [lead_id for lead_id in lead_ids if lead_id not in found]
        if missing:
            raise LeadsNotFoundError(missing)

        logger.info("Scoring %d leads against offer %s", len(leads), offer.id)

        if self.max_concurrency == 1:
            results = []
            for lead in leads:
                results.append(await self.score_lead(lead, offer))
        else:
            semaphore = asyncio.Semaphore(self.max_concurrency)

            async def bounded(lead: Lead) -> ScoringResult:
                async with semaphore:
                    return await self.score_lead(lead, offer)

            results = list(await asyncio.gather(*(bounded(lead) for lead in leads)))

        total_time = (time.time() - start_time) * 1000
        self.stats["batches"] += 1
        self.stats["total_processing_time_ms"] += total_time
        logger.info("Scored %d leads in %.0f ms", len(results), total_time)

        return results

    async def score_lead(self, lead: Lead, offer: Offer) -> ScoringResult:
        """Score one lead, store the result and update the lead's scoring fields"""
        rule = self.rule_scorer.score(lead, offer)
        for line in rule.logs:
            logger.debug("lead %s: %s", lead.id, line)

        ai = await self.ai_scorer.analyze(lead, offer, rule.breakdown)
        if ai.intent is AIIntent.ERROR:
            self.stats["ai_errors"] += 1

        total = rule.total_score + ai.score
        intent = calculate_final_intent(total)
        processed_at = datetime.now(timezone.utc)

        result = ScoringResult(
            lead_id=lead.id,
            name=lead.name,
            role=lead.role,
            company=lead.company,
            industry=lead.industry,
            location=lead.location,
            intent=intent,
            score=total,
            rule_score=rule.total_score,
            ai_score=ai.score,
            reasoning=ai.reasoning,
            processed_at=processed_at,
        )
        self.results.add(result)

        lead.rule_score = rule.total_score
        lead.ai_score = ai.score
        lead.total_score = total
        lead.intent = intent.value
        lead.reasoning = ai.reasoning
        lead.processed_at = processed_at

        self.stats["leads_scored"] += 1
        return result

    def get_all_results(self) -> ResultsReport:
        """Every stored result plus the summary"""
        results = self.results.get_all()
        return ResultsReport(results=results, summary=summarize_results(results))

    def get_stats(self) -> Dict[str, Any]:
        """Get engine statistics"""
        stats = self.stats.copy()
        if stats["leads_scored"] > 0:
            stats["ai_error_rate"] = round(stats["ai_errors"] / stats["leads_scored"] * 100, 1)
            stats["avg_processing_time_ms"] = round(
                stats["total_processing_time_ms"] / stats["leads_scored"], 2
            )
        return stats
