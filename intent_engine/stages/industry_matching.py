"""
Industry Matching
=================
Matches a lead's industry against an offer's ideal use cases.

Tiers (checked in order across all use cases, first hit wins):
- Exact (20): either string contains the other
- Synonym (10): a synonym of the use case appears in the industry, or vice versa
- Partial (10): shared words longer than two characters
- No match (0)
"""

from typing import Dict, List, Optional

from ..models.schemas import IndustryMatch, MatchType
from ..config.settings import INDUSTRY_SCORES, INDUSTRY_SYNONYMS


class IndustryMatcher:
    """
    Tiered industry matcher. A later use case's exact match beats an
    earlier use case's synonym or partial match.
    """

    def __init__(self, synonyms: Optional[Dict[str, List[str]]] = None):
        self.synonyms = synonyms if synonyms is not None else INDUSTRY_SYNONYMS

    def match(self, lead_industry: Optional[str], ideal_use_cases: List[str]) -> IndustryMatch:
        """
        Match an industry string against the offer's ideal use cases.

        Args:
            lead_industry: Industry of the lead (may be blank)
            ideal_use_cases: Ideal use cases from the offer

        Returns:
            IndustryMatch with tier, score, reasoning and matched keywords
        """
        industry = self._normalize(lead_industry)
        use_cases = [self._normalize(u) for u in ideal_use_cases or []]

        if not industry or not use_cases:
            return IndustryMatch(
                match_type=MatchType.NO_MATCH,
                score=INDUSTRY_SCORES["no_match"],
                reasoning="No industry information or ideal use cases provided",
            )

        return (
            self._match_exact(lead_industry, industry, use_cases)
            or self._match_synonym(lead_industry, industry, use_cases)
            or self._match_partial(lead_industry, industry, use_cases)
            or IndustryMatch(
                match_type=MatchType.NO_MATCH,
                score=INDUSTRY_SCORES["no_match"],
                reasoning="No exact, synonym, or significant partial industry match found.",
            )
        )

    def _match_exact(
        self, raw: str, industry: str, use_cases: List[str]
    ) -> Optional[IndustryMatch]:
        """Tier 1: substring containment in either direction"""
        for use_case in use_cases:
            if not use_case:
                continue
            if use_case in industry or industry in use_case:
                return IndustryMatch(
                    match_type=MatchType.EXACT,
                    score=INDUSTRY_SCORES["exact_match"],
                    reasoning=f'Exact industry match: "{raw}" matches "{use_case}"',
                    matched_keywords=[use_case],
                )
        return None

    def _match_synonym(
        self, raw: str, industry: str, use_cases: List[str]
    ) -> Optional[IndustryMatch]:
        """Tier 2: synonym table keyed by the use case"""
        for use_case in use_cases:
            for synonym in self.synonyms.get(use_case, []):
                if synonym in industry or industry in synonym:
                    return IndustryMatch(
                        match_type=MatchType.ADJACENT,
                        score=INDUSTRY_SCORES["adjacent"],
                        reasoning=(
                            f'Adjacent industry match: "{raw}" is a synonym of '
                            f'"{use_case}" via "{synonym}"'
                        ),
                        matched_keywords=[synonym],
                    )
        return None

    def _match_partial(
        self, raw: str, industry: str, use_cases: List[str]
    ) -> Optional[IndustryMatch]:
        """Tier 3: shared significant words"""
        industry_words = self._significant_words(industry)
        for use_case in use_cases:
            use_case_words = set(self._significant_words(use_case))
            common = []
            for word in industry_words:
                if word in use_case_words and word not in common:
                    common.append(word)
            if common:
                return IndustryMatch(
                    match_type=MatchType.ADJACENT,
                    score=INDUSTRY_SCORES["adjacent"],
                    reasoning=f'Partial industry match: "{raw}" shares keywords with ideal use cases',
                    matched_keywords=common,
                )
        return None

    @staticmethod
    def _significant_words(text: str) -> List[str]:
        return [word for word in text.split() if len(word) > 2]

    @staticmethod
    def _normalize(text: Optional[str]) -> str:
        return text.lower().strip() if text else ""
