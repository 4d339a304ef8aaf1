import pytest

from intent_engine.engine import LeadScoringEngine
from intent_engine.llm.retry import RetryPolicy
from intent_engine.models.schemas import Lead, Offer, OfferCreate
from intent_engine.stages.ai_scoring import AIScorer


class FakeLLMClient:
    """Returns queued replies (or raises queued exceptions); the last item repeats"""

    configured = True

    def __init__(self, *replies):
        self.replies = list(replies) or ["INTENT: Medium\nREASONING: Default reply."]
        self.calls = 0
        self.prompts = []
        self.samplings = []

    async def complete(self, prompt, sampling=None):
        self.calls += 1
        self.prompts.append(prompt)
        self.samplings.append(sampling)
        reply = self.replies.pop(0) if len(self.replies) > 1 else self.replies[0]
        if isinstance(reply, Exception):
            raise reply
        return reply


class FakeSleep:
    def __init__(self):
        self.delays = []

    async def __call__(self, delay):
        self.delays.append(delay)


def make_lead(**overrides) -> Lead:
    fields = {
        "name": "Ava Patel",
        "role": "CEO",
        "company": "FlowMetrics",
        "industry": "Software",
        "location": "Austin, TX",
        "linkedin_bio": "Building sales tooling for B2B teams",
    }
    fields.update(overrides)
    return Lead(**fields)


def make_offer(**overrides) -> Offer:
    fields = {
        "name": "AI Outreach Automation",
        "value_props": ["24/7 outreach", "6x more meetings"],
        "ideal_use_cases": ["Software"],
    }
    fields.update(overrides)
    return Offer(**fields)


@pytest.fixture
def fake_sleep():
    return FakeSleep()


@pytest.fixture
def fake_llm():
    return FakeLLMClient("INTENT: High\nREASONING: Decision maker in a target industry.")


@pytest.fixture
def engine(fake_llm, fake_sleep):
    scorer = AIScorer(client=fake_llm, retry_policy=RetryPolicy(sleep=fake_sleep))
    return LeadScoringEngine(ai_scorer=scorer)


@pytest.fixture
def stored_offer(engine):
    return engine.offers.create(OfferCreate(
        name="AI Outreach Automation",
        value_props=["24/7 outreach", "6x more meetings"],
        ideal_use_cases=["Software"],
    ))
