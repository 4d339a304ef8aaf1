import asyncio
import uuid
from datetime import timedelta

import pytest

from conftest import FakeLLMClient, FakeSleep

from intent_engine.engine import LeadScoringEngine, calculate_final_intent, summarize_results
from intent_engine.errors import LeadsNotFoundError, OfferNotFoundError
from intent_engine.llm.retry import RetryPolicy
from intent_engine.models.schemas import IntentLabel, OfferCreate, ScoringResult
from intent_engine.stages.ai_scoring import AIScorer

CEO_ROW = {
    "name": "Ava Patel",
    "role": "CEO",
    "company": "FlowMetrics",
    "industry": "Software",
    "location": "Austin, TX",
    "linkedin_bio": "Building sales tooling for B2B teams",
}
INTERN_ROW = {
    "name": "Sam Lee",
    "role": "Intern",
    "company": "CareNet",
    "industry": "Healthcare",
    "location": "Boston, MA",
    "linkedin_bio": "",
}


def _engine_with(client, **kwargs):
    scorer = AIScorer(client=client, retry_policy=RetryPolicy(sleep=FakeSleep()))
    return LeadScoringEngine(ai_scorer=scorer, **kwargs)


def _offer(engine):
    return engine.offers.create(OfferCreate(
        name="AI Outreach Automation",
        value_props=["24/7 outreach"],
        ideal_use_cases=["Software"],
    ))


@pytest.mark.parametrize(
    "score,label",
    [(100, IntentLabel.HIGH), (70, IntentLabel.HIGH), (69, IntentLabel.MEDIUM),
     (40, IntentLabel.MEDIUM), (39, IntentLabel.LOW), (0, IntentLabel.LOW)],
)
def test_calculate_final_intent(score, label) -> None:
    assert calculate_final_intent(score) == label


def test_scores_and_stores_lead(engine, stored_offer, fake_llm) -> None:
    _, leads = engine.leads.add_batch([CEO_ROW])
    results = asyncio.run(engine.score_batch(stored_offer.id, [leads[0].id]))

    assert len(results) == 1
    result = results[0]
    assert result.rule_score == 50
    assert result.ai_score == 50
    assert result.score == 100
    assert result.intent == IntentLabel.HIGH
    assert result.reasoning == "Decision maker in a target industry."
    assert result.name == "Ava Patel"
    assert engine.results.get_for_lead(leads[0].id) == [result]

    lead = engine.leads.get_by_id(leads[0].id)
    assert lead.total_score == 100
    assert lead.intent == "High"
    assert lead.processed_at == result.processed_at
    assert result.processed_at.tzinfo is not None
    assert result.processed_at.utcoffset() == timedelta(0)
    assert fake_llm.calls == 1


def test_unknown_offer_aborts_before_scoring(engine, fake_llm) -> None:
    _, leads = engine.leads.add_batch([CEO_ROW])
    missing = str(uuid.uuid4())

    with pytest.raises(OfferNotFoundError) as exc_info:
        asyncio.run(engine.score_batch(missing, [leads[0].id]))

    assert str(exc_info.value) == f"Offer with ID {missing} not found."
    assert fake_llm.calls == 0
    assert engine.results.get_all() == []


def test_unknown_leads_abort_before_scoring(engine, stored_offer, fake_llm) -> None:
    _, leads = engine.leads.add_batch([CEO_ROW])
    ghost_a, ghost_b = str(uuid.uuid4()), str(uuid.uuid4())

    with pytest.raises(LeadsNotFoundError) as exc_info:
        asyncio.run(engine.score_batch(stored_offer.id, [ghost_a, leads[0].id, ghost_b]))

    assert exc_info.value.missing_ids == [ghost_a, ghost_b]
    assert fake_llm.calls == 0
    assert engine.results.get_all() == []


def test_ai_failure_keeps_rule_score() -> None:
    engine = _engine_with(FakeLLMClient(RuntimeError("provider down")))
    offer = _offer(engine)
    _, leads = engine.leads.add_batch([CEO_ROW])

    result = asyncio.run(engine.score_batch(offer.id, [leads[0].id]))[0]

    assert result.ai_score == 0
    assert result.score == 50
    assert result.intent == IntentLabel.MEDIUM
    assert result.reasoning.startswith("Error: Failed to get AI intent after 3 attempts")
    assert engine.get_stats()["ai_errors"] == 1


def test_one_failing_lead_does_not_abort_batch() -> None:
    client = FakeLLMClient(
        "INTENT: High\nREASONING: a",
        RuntimeError("x"), RuntimeError("x"), RuntimeError("x"),
        "INTENT: Low\nREASONING: c",
    )
    engine = _engine_with(client)
    offer = _offer(engine)
    _, leads = engine.leads.add_batch([CEO_ROW, CEO_ROW, CEO_ROW])

    results = asyncio.run(engine.score_batch(offer.id, [lead.id for lead in leads]))

    assert [r.ai_score for r in results] == [50, 0, 10]
    assert [r.intent for r in results] == [IntentLabel.HIGH, IntentLabel.MEDIUM, IntentLabel.MEDIUM]


def test_concurrent_scoring_preserves_request_order() -> None:
    engine = _engine_with(FakeLLMClient("INTENT: Medium\nREASONING: ok"), max_concurrency=3)
    offer = _offer(engine)
    rows = [dict(CEO_ROW, name=f"Lead {i}") for i in range(6)]
    _, leads = engine.leads.add_batch(rows)
    requested = [lead.id for lead in reversed(leads)]

    results = asyncio.run(engine.score_batch(offer.id, requested))

    assert [r.lead_id for r in results] == requested
    assert all(r.score == 80 for r in results)


def test_duplicate_ids_are_each_scored(engine, stored_offer, fake_llm) -> None:
    _, leads = engine.leads.add_batch([CEO_ROW])
    results = asyncio.run(engine.score_batch(stored_offer.id, [leads[0].id, leads[0].id]))
    assert len(results) == 2
    assert fake_llm.calls == 2


def test_results_accumulate_across_batches(engine, stored_offer) -> None:
    _, leads = engine.leads.add_batch([CEO_ROW])
    asyncio.run(engine.score_batch(stored_offer.id, [leads[0].id]))
    asyncio.run(engine.score_batch(stored_offer.id, [leads[0].id]))

    assert len(engine.results.get_for_lead(leads[0].id)) == 2
    assert engine.get_all_results().summary.total_leads == 2


def test_results_report_summary() -> None:
    engine = _engine_with(FakeLLMClient("INTENT: Low\nREASONING: Weak."))
    offer = _offer(engine)
    _, leads = engine.leads.add_batch([CEO_ROW, INTERN_ROW])
    asyncio.run(engine.score_batch(offer.id, [lead.id for lead in leads]))

    report = engine.get_all_results()
    assert [r.score for r in report.results] == [60, 10]
    assert report.summary.total_leads == 2
    assert report.summary.high_intent == 0
    assert report.summary.medium_intent == 1
    assert report.summary.low_intent == 1
    assert report.summary.average_score == 35.0


def test_summarize_results_rounds_average() -> None:
    results = [
        ScoringResult(
            lead_id=str(uuid.uuid4()),
            intent=calculate_final_intent(score),
            score=score,
            rule_score=min(score, 50),
            ai_score=max(score - 50, 0),
            reasoning="",
        )
        for score in (100, 60, 10)
    ]
    summary = summarize_results(results)
    assert summary.average_score == 56.67
    assert (summary.high_intent, summary.medium_intent, summary.low_intent) == (1, 1, 1)


def test_summary_of_no_results() -> None:
    summary = summarize_results([])
    assert summary.total_leads == 0
    assert summary.average_score == 0


def test_stats_track_scored_leads(engine, stored_offer) -> None:
    _, leads = engine.leads.add_batch([CEO_ROW, INTERN_ROW])
    asyncio.run(engine.score_batch(stored_offer.id, [lead.id for lead in leads]))

    stats = engine.get_stats()
    assert stats["batches"] == 1
    assert stats["leads_scored"] == 2
    assert stats["ai_error_rate"] == 0
