"""
In-memory repositories for offers, leads and scoring results.

One instance of each per process (or per test). Data lives only as long as
the process; all access happens on a single event loop, so no locking.
"""

from collections import OrderedDict
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple
import uuid

from ..models.schemas import Lead, Offer, OfferCreate, ScoringResult

# Assigned by the store or the scoring pipeline, never taken from uploads
RESERVED_LEAD_FIELDS = {
    "id",
    "batch_id",
    "rule_score",
    "ai_score",
    "total_score",
    "intent",
    "reasoning",
    "processed_at",
}


class OfferRepository:
    """Append-only offer store"""

    def __init__(self):
        self._offers: List[Offer] = []

    def create(self, data: OfferCreate) -> Offer:
        offer = Offer(**data.model_dump())
        self._offers.append(offer)
        return offer

    def get_by_id(self, offer_id: str) -> Optional[Offer]:
        for offer in self._offers:
            if offer.id == offer_id:
                return offer
        return None

    def get_all(self) -> List[Offer]:
        return list(self._offers)


class LeadRepository:
    """Lead store, grouped by upload batch"""

    def __init__(self):
        self._batches: "OrderedDict[str, List[Lead]]" = OrderedDict()
        self._by_id: Dict[str, Lead] = {}

    def add_batch(self, rows: Iterable[Mapping[str, Any]]) -> Tuple[str, List[Lead]]:
        """Store parsed CSV rows as one batch with fresh ids"""
        batch_id = str(uuid.uuid4())
        leads = []
        for row in rows:
            fields = {k: v for k, v in row.items() if k not in RESERVED_LEAD_FIELDS}
            lead = Lead(batch_id=batch_id, **fields)
            leads.append(lead)
            self._by_id[lead.id] = lead
        self._batches[batch_id] = leads
        return batch_id, leads

    def get_by_id(self, lead_id: str) -> Optional[Lead]:
        return self._by_id.get(lead_id)

    def get_by_ids(self, lead_ids: Iterable[str]) -> List[Lead]:
        """Leads in request order; unknown ids are skipped"""
        return [self._by_id[i] for i in lead_ids if i in self._by_id]

    def get_all_by_batch(self) -> Dict[str, List[Lead]]:
        return {batch_id: list(leads) for batch_id, leads in self._batches.items()}

    def count(self) -> int:
        return len(self._by_id)


class ResultRepository:
    """Cumulative scoring results, keyed by result id"""

    def __init__(self):
        self._results: "OrderedDict[str, ScoringResult]" = OrderedDict()

    def add(self, result: ScoringResult) -> ScoringResult:
        self._results[result.id] = result
        return result

    def get_all(self) -> List[ScoringResult]:
        return list(self._results.values())

    def get_for_lead(self, lead_id: str) -> List[ScoringResult]:
        return [r for r in self._results.values() if r.lead_id == lead_id]
