"""
Lead Intent Scoring Engine - Usage Examples
===========================================
This file demonstrates how to use the engine both programmatically and
via the API.
"""

import asyncio


# =============================================================================
# EXAMPLE 1: Rule scoring only (no LLM needed)
# =============================================================================

def example_rule_scoring():
    """Score a lead with the deterministic rules"""
    from intent_engine.models.schemas import Lead, Offer
    from intent_engine.stages import RuleScorer

    offer = Offer(
        name="AI Outreach Automation",
        value_props=["24/7 outreach", "6x more meetings"],
        ideal_use_cases=["B2B SaaS mid-market", "Software"],
    )
    lead = Lead(
        name="Ava Patel",
        role="Head of Growth",
        company="FlowMetrics",
        industry="Software",
        location="Austin, TX",
        linkedin_bio="Scaling outbound at a Series B SaaS company",
    )

    result = RuleScorer().score(lead, offer)
    print(f"Rule score: {result.total_score}/50")
    for line in result.logs:
        print(f"  - {line}")


# =============================================================================
# EXAMPLE 2: Full engine (rules + LLM)
# =============================================================================

async def example_full_engine():
    """Upload leads, create an offer and score the batch"""
    from intent_engine.engine import LeadScoringEngine
    from intent_engine.models.schemas import OfferCreate

    engine = LeadScoringEngine()  # reads GROQ_API_KEY from the environment

    offer = engine.offers.create(OfferCreate(
        name="AI Outreach Automation",
        value_props=["24/7 outreach", "6x more meetings"],
        ideal_use_cases=["B2B SaaS mid-market"],
    ))
    batch_id, leads = engine.leads.add_batch([
        {
            "name": "Ava Patel",
            "role": "Head of Growth",
            "company": "FlowMetrics",
            "industry": "B2B SaaS",
            "location": "Austin, TX",
            "linkedin_bio": "Scaling outbound at a Series B SaaS company",
        },
        {
            "name": "Sam Lee",
            "role": "Nurse",
            "company": "City Hospital",
            "industry": "Healthcare",
            "location": "Boston, MA",
            "linkedin_bio": "",
        },
    ])

    results = await engine.score_batch(offer.id, [lead.id for lead in leads])
    for r in results:
        print(f"{r.name}: {r.intent.value} ({r.score}) rule={r.rule_score} ai={r.ai_score}")
        print(f"  {r.reasoning}")

    print(engine.get_all_results().summary)


# =============================================================================
# EXAMPLE 3: API usage with curl
# =============================================================================

API_EXAMPLES = """
# Create an offer
curl -X POST http://localhost:8000/api/offer \\
  -H "Content-Type: application/json" \\
  -d '{"name": "AI Outreach Automation",
       "value_props": ["24/7 outreach", "6x more meetings"],
       "ideal_use_cases": ["B2B SaaS mid-market"]}'

# Upload leads
curl -X POST http://localhost:8000/api/leads/upload -F "csvFile=@leads.csv"

# List leads to get their ids
curl http://localhost:8000/api/leads

# Score
curl -X POST http://localhost:8000/api/score \\
  -H "Content-Type: application/json" \\
  -d '{"offerId": "<offer-id>", "leadIds": ["<lead-id>"]}'

# Results with summary
curl http://localhost:8000/api/results
"""


if __name__ == "__main__":
    example_rule_scoring()
    asyncio.run(example_full_engine())
    print(API_EXAMPLES)
