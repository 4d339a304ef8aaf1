from intent_engine.models.schemas import IntentLabel, OfferCreate, ScoringResult
from intent_engine.storage.repositories import LeadRepository, OfferRepository, ResultRepository


def test_offer_repository() -> None:
    repo = OfferRepository()
    offer = repo.create(OfferCreate(name="Outreach", value_props=["fast"], ideal_use_cases=["SaaS"]))

    assert repo.get_by_id(offer.id) == offer
    assert repo.get_by_id("missing") is None
    assert repo.get_all() == [offer]


def test_lead_batches_get_fresh_ids() -> None:
    repo = LeadRepository()
    batch_a, leads_a = repo.add_batch([{"name": "Ava"}, {"name": "Sam"}])
    batch_b, leads_b = repo.add_batch([{"name": "Ava"}])

    assert batch_a != batch_b
    assert all(lead.batch_id == batch_a for lead in leads_a)
    assert leads_a[0].id != leads_b[0].id
    assert repo.count() == 3
    assert list(repo.get_all_by_batch()) == [batch_a, batch_b]


def test_uploaded_rows_cannot_set_reserved_fields() -> None:
    repo = LeadRepository()
    _, leads = repo.add_batch([{"id": "forged", "name": "Ava", "total_score": "99", "intent": "High"}])

    lead = leads[0]
    assert lead.id != "forged"
    assert lead.total_score == 0
    assert lead.intent == "Low"
    assert repo.get_by_id("forged") is None


def test_get_by_ids_keeps_request_order() -> None:
    repo = LeadRepository()
    _, leads = repo.add_batch([{"name": "A"}, {"name": "B"}, {"name": "C"}])
    ids = [leads[2].id, "unknown", leads[0].id]

    assert [lead.name for lead in repo.get_by_ids(ids)] == ["C", "A"]


def test_result_repository() -> None:
    repo = ResultRepository()
    first = repo.add(ScoringResult(
        lead_id="lead-1", intent=IntentLabel.HIGH, score=90, rule_score=40, ai_score=50, reasoning="a",
    ))
    second = repo.add(ScoringResult(
        lead_id="lead-2", intent=IntentLabel.LOW, score=10, rule_score=0, ai_score=10, reasoning="b",
    ))

    assert repo.get_all() == [first, second]
    assert repo.get_for_lead("lead-1") == [first]


def test_result_timestamps_are_timezone_aware() -> None:
    result = ScoringResult(lead_id="lead-1", intent=IntentLabel.LOW, score=0, rule_score=0, ai_score=0, reasoning="")
    assert result.processed_at.tzinfo is not None
