"""
Rule-Based Scoring
==================
Deterministic score (0-50) combining three dimensions:
- Role (0/10/20)
- Industry fit (0/10/20)
- Data completeness (0/10)

Each dimension runs in isolation: a failure in one is logged, scores 0,
and the other dimensions still run.
"""

import logging
from typing import Any, Mapping, Optional, Union

from ..models.schemas import (
    Lead,
    Offer,
    RuleScoreResult,
    RuleScoreBreakdown,
    RoleClassification,
    RoleCategory,
    IndustryMatch,
    MatchType,
    CompletenessResult,
)
from ..config.settings import MAX_RULE_SCORE
from .role_classification import RoleClassifier
from .industry_matching import IndustryMatcher
from .data_completeness import CompletenessChecker

logger = logging.getLogger(__name__)


class RuleScorer:
    """
    Composes role, industry and completeness scoring into one capped score.
    """

    def __init__(
        self,
        role_classifier: Optional[RoleClassifier] = None,
        industry_matcher: Optional[IndustryMatcher] = None,
        completeness_checker: Optional[CompletenessChecker] = None,
        max_score: int = MAX_RULE_SCORE,
    ):
        self.role_classifier = role_classifier or RoleClassifier()
        self.industry_matcher = industry_matcher or IndustryMatcher()
        self.completeness_checker = completeness_checker or CompletenessChecker()
        self.max_score = max_score

    def score(
        self,
        lead: Union[Lead, Mapping[str, Any], None],
        offer: Union[Offer, Mapping[str, Any], None],
    ) -> RuleScoreResult:
        """
        Calculate the rule-based score for a lead against an offer.

        Never raises: invalid input yields a zero score with an error log.
        """
        logs = []

        if not isinstance(lead, (Lead, Mapping)):
            logs.append("Error: Invalid lead object provided.")
            return RuleScoreResult(total_score=0, logs=logs)

        use_cases = _field(offer, "ideal_use_cases") if isinstance(offer, (Offer, Mapping)) else None
        if use_cases is None:
            logs.append("Error: Invalid offer object or missing ideal_use_cases provided.")
            return RuleScoreResult(total_score=0, logs=logs)

        breakdown = RuleScoreBreakdown()
        total = 0

        # 1. Role
        try:
            role = self.role_classifier.classify(_field(lead, "role") or "")
            breakdown.role = role
            total += role.score
            logs.append(f"Role Scoring: {role.reasoning} (Score: {role.score})")
        except Exception as e:
            logger.exception("Role scoring failed")
            logs.append(f"Error during Role Scoring: {e}. Assigning 0 score.")
            breakdown.role = RoleClassification(
                category=RoleCategory.ERROR, score=0, reasoning=f"Error: {e}"
            )

        # 2. Industry
        try:
            industry = self.industry_matcher.match(_field(lead, "industry") or "", list(use_cases))
            breakdown.industry = industry
            total += industry.score
            logs.append(f"Industry Scoring: {industry.reasoning} (Score: {industry.score})")
        except Exception as e:
            logger.exception("Industry matching failed")
            logs.append(f"Error during Industry Matching: {e}. Assigning 0 score.")
            breakdown.industry = IndustryMatch(
                match_type=MatchType.ERROR, score=0, reasoning=f"Error: {e}"
            )

        # 3. Completeness
        try:
            completeness = self.completeness_checker.check(lead)
            breakdown.completeness = completeness
            total += completeness.score
            logs.append(f"Completeness Scoring: {completeness.reasoning} (Score: {completeness.score})")
        except Exception as e:
            logger.exception("Completeness check failed")
            logs.append(f"Error during Data Completeness Check: {e}. Assigning 0 score.")
            breakdown.completeness = CompletenessResult(score=0, reasoning=f"Error: {e}")

        if total > self.max_score:
            total = self.max_score
            logs.append(f"Total rule-based score capped at MAX_RULE_SCORE ({self.max_score}).")

        return RuleScoreResult(total_score=total, breakdown=breakdown, logs=logs)


def _field(obj: Union[Lead, Offer, Mapping[str, Any]], name: str) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(name)
    return getattr(obj, name, None)
