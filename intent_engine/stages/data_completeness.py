"""
Data Completeness
=================
Binary check that every required lead field is present and non-blank.
"""

from typing import Any, List, Mapping, Optional, Union

from ..models.schemas import CompletenessResult, Lead
from ..config.settings import COMPLETENESS_SCORE, REQUIRED_LEAD_FIELDS


class CompletenessChecker:
    """Awards the completeness bonus only when no required field is missing"""

    def __init__(self, required_fields: Optional[List[str]] = None):
        self.required_fields = required_fields if required_fields is not None else REQUIRED_LEAD_FIELDS

    def check(self, lead: Union[Lead, Mapping[str, Any]]) -> CompletenessResult:
        missing = [f for f in self.required_fields if self._is_missing(self._get(lead, f))]
        present = len(self.required_fields) - len(missing)
        percentage = round(present / len(self.required_fields) * 100) if self.required_fields else 100

        if not missing:
            return CompletenessResult(
                score=COMPLETENESS_SCORE,
                reasoning="Lead data is complete.",
                percentage=percentage,
            )

        return CompletenessResult(
            score=0,
            reasoning=f"Lead data is incomplete. Missing fields: {', '.join(missing)}.",
            missing_fields=missing,
            percentage=percentage,
        )

    @staticmethod
    def _get(lead: Union[Lead, Mapping[str, Any]], field: str) -> Any:
        if isinstance(lead, Mapping):
            return lead.get(field)
        return getattr(lead, field, None)

    @staticmethod
    def _is_missing(value: Any) -> bool:
        if value is None:
            return True
        if isinstance(value, str):
            return not value.strip()
        return not value
