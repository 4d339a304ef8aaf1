"""
Role Classification
===================
Classifies a lead's job title into a buying-power category.

Categories:
- decision_maker (20): C-level, founders, VPs, directors, owners
- influencer (10): managers, leads, senior ICs, consultants
- other (0): everything else, including a blank title
"""

from typing import List, Optional

from ..models.schemas import RoleClassification, RoleAnalysis, RoleCategory
from ..config.settings import (
    DECISION_MAKER_KEYWORDS,
    INFLUENCER_KEYWORDS,
    ROLE_CATEGORY_SCORES,
)


class RoleClassifier:
    """
    Keyword-based role classifier. Decision-maker keywords are checked
    strictly before influencer keywords.
    """

    def __init__(
        self,
        decision_maker_keywords: Optional[List[str]] = None,
        influencer_keywords: Optional[List[str]] = None,
    ):
        self.decision_maker_keywords = (
            decision_maker_keywords if decision_maker_keywords is not None else DECISION_MAKER_KEYWORDS
        )
        self.influencer_keywords = influencer_keywords if influencer_keywords is not None else INFLUENCER_KEYWORDS

    def classify(self, role: Optional[str]) -> RoleClassification:
        """
        Classify a raw role string.

        Args:
            role: Job title as provided by the lead (may be blank)

        Returns:
            RoleClassification with category, score, reasoning and matched keywords
        """
        normalized = self._normalize(role)

        matched = self._find_keywords(normalized, self.decision_maker_keywords)
        if matched:
            return RoleClassification(
                category=RoleCategory.DECISION_MAKER,
                score=ROLE_CATEGORY_SCORES["decision_maker"],
                reasoning=f"Classified as decision maker due to keywords: {', '.join(matched)}",
                matched_keywords=matched,
            )

        matched = self._find_keywords(normalized, self.influencer_keywords)
        if matched:
            return RoleClassification(
                category=RoleCategory.INFLUENCER,
                score=ROLE_CATEGORY_SCORES["influencer"],
                reasoning=f"Classified as influencer due to keywords: {', '.join(matched)}",
                matched_keywords=matched,
            )

        return RoleClassification(
            category=RoleCategory.OTHER,
            score=ROLE_CATEGORY_SCORES["other"],
            reasoning="Classified as other, no specific keywords matched.",
        )

    def analyze(self, role: Optional[str]) -> RoleAnalysis:
        """Classification plus the original and normalized inputs"""
        result = self.classify(role)
        return RoleAnalysis(
            original_role=role or "",
            normalized_role=self._normalize(role),
            **result.model_dump(),
        )

    @staticmethod
    def _normalize(role: Optional[str]) -> str:
        return role.lower().strip() if role else ""

    @staticmethod
    def _find_keywords(text: str, keywords: List[str]) -> List[str]:
        if not text:
            return []
        return [keyword for keyword in keywords if keyword in text]
