"""
Pydantic schemas for the Lead Intent Scoring Engine
"""

from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator
from datetime import datetime, timezone
import uuid


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# =============================================================================
# ENUMS
# =============================================================================

class RoleCategory(str, Enum):
    """Buying-power category of a lead's job title"""
    DECISION_MAKER = "decision_maker"
    INFLUENCER = "influencer"
    OTHER = "other"
    ERROR = "error"


class MatchType(str, Enum):
    """Industry match tier"""
    EXACT = "exact"
    ADJACENT = "adjacent"
    NO_MATCH = "no_match"
    ERROR = "error"


class AIIntent(str, Enum):
    """Intent label parsed from the language model response"""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    UNKNOWN = "unknown"
    ERROR = "error"


class IntentLabel(str, Enum):
    """Final intent derived from the combined score"""
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


# =============================================================================
# OFFERS
# =============================================================================

def _require_non_empty_strings(values: List[str], label: str) -> List[str]:
    if not values:
        raise ValueError(f"Offer {label} are required and must be a non-empty array of strings.")
    if any(not isinstance(v, str) or not v.strip() for v in values):
        raise ValueError(f"All offer {label} must be non-empty strings.")
    return values


class OfferCreate(BaseModel):
    """Payload for creating an offer"""
    name: str
    value_props: List[str]
    ideal_use_cases: List[str]

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Offer name is required and must be a non-empty string.")
        return value

    @field_validator("value_props")
    @classmethod
    def _value_props_not_blank(cls, value: List[str]) -> List[str]:
        return _require_non_empty_strings(value, "value propositions")

    @field_validator("ideal_use_cases")
    @classmethod
    def _use_cases_not_blank(cls, value: List[str]) -> List[str]:
        return _require_non_empty_strings(value, "ideal use cases")

    class Config:
        json_schema_extra = {
            "example": {
                "name": "AI Outreach Automation",
                "value_props": ["24/7 outreach", "6x more meetings"],
                "ideal_use_cases": ["B2B SaaS mid-market"],
            }
        }


class Offer(BaseModel):
    """A stored offer; immutable once created"""
    id: str = Field(default_factory=_new_id)
    name: str
    value_props: List[str]
    ideal_use_cases: List[str]

    class Config:
        frozen = True


# =============================================================================
# LEADS
# =============================================================================

class Lead(BaseModel):
    """A prospect record loaded from a CSV batch"""
    id: str = Field(default_factory=_new_id)
    batch_id: Optional[str] = None
    name: Optional[str] = None
    role: Optional[str] = None
    company: Optional[str] = None
    industry: Optional[str] = None
    location: Optional[str] = None
    linkedin_bio: Optional[str] = None

    # Scoring fields, updated by the scoring pipeline
    rule_score: int = 0
    ai_score: int = 0
    total_score: int = 0
    intent: str = IntentLabel.LOW.value
    reasoning: str = ""
    processed_at: Optional[datetime] = None

    class Config:
        extra = "allow"


# =============================================================================
# RULE SCORING RESULTS
# =============================================================================

class RoleClassification(BaseModel):
    """Result of classifying a job title"""
    category: RoleCategory
    score: int
    reasoning: str
    matched_keywords: List[str] = Field(default_factory=list)


class RoleAnalysis(RoleClassification):
    """Role classification with the inputs used, for debugging"""
    original_role: str
    normalized_role: str


class IndustryMatch(BaseModel):
    """Result of matching a lead industry against ideal use cases"""
    match_type: MatchType
    score: int
    reasoning: str
    matched_keywords: List[str] = Field(default_factory=list)


class CompletenessResult(BaseModel):
    """Result of the required-field check"""
    score: int
    reasoning: str
    missing_fields: List[str] = Field(default_factory=list)
    percentage: int = 0


class RuleScoreBreakdown(BaseModel):
    """Per-dimension rule results; entries are absent when input was invalid"""
    role: Optional[RoleClassification] = None
    industry: Optional[IndustryMatch] = None
    completeness: Optional[CompletenessResult] = None

    def is_empty(self) -> bool:
        return self.role is None and self.industry is None and self.completeness is None


class RuleScoreResult(BaseModel):
    """Output of the rule scorer"""
    total_score: int = 0
    breakdown: RuleScoreBreakdown = Field(default_factory=RuleScoreBreakdown)
    logs: List[str] = Field(default_factory=list)


# =============================================================================
# AI SCORING RESULTS
# =============================================================================

class AIScoreResult(BaseModel):
    """Output of a single language-model analysis"""
    score: int = 0
    intent: AIIntent = AIIntent.UNKNOWN
    reasoning: str = "AI analysis failed or not performed."
    logs: List[str] = Field(default_factory=list)


class AIScore(BaseModel):
    """Score and reasoning only"""
    score: int
    reasoning: str


# =============================================================================
# FINAL RESULTS
# =============================================================================

class ScoringResult(BaseModel):
    """One lead scored against one offer"""
    id: str = Field(default_factory=_new_id)
    lead_id: str
    name: Optional[str] = None
    role: Optional[str] = None
    company: Optional[str] = None
    industry: Optional[str] = None
    location: Optional[str] = None
    intent: IntentLabel
    score: int
    rule_score: int
    ai_score: int
    reasoning: str
    processed_at: datetime = Field(default_factory=_utcnow)

    class Config:
        frozen = True


class ResultsSummary(BaseModel):
    """Aggregate counts over stored results"""
    total_leads: int = 0
    high_intent: int = 0
    medium_intent: int = 0
    low_intent: int = 0
    average_score: float = 0.0


class ResultsReport(BaseModel):
    """All stored results with their summary"""
    results: List[ScoringResult] = Field(default_factory=list)
    summary: ResultsSummary = Field(default_factory=ResultsSummary)


# =============================================================================
# API REQUEST SCHEMAS
# =============================================================================

class ScoreRequest(BaseModel):
    """Request to score a batch of leads against an offer"""
    offerId: uuid.UUID
    leadIds: List[uuid.UUID] = Field(..., min_length=1)

    class Config:
        extra = "forbid"
        json_schema_extra = {
            "example": {
                "offerId": "4f8c2a8e-4b8f-4b1a-9d3e-2d1c8a7b6e5f",
                "leadIds": ["b1e7c5a2-3d4f-4e6a-8b9c-0d1e2f3a4b5c"],
            }
        }


class UploadSummary(BaseModel):
    """Response for a processed CSV upload"""
    batch_id: str
    leads_count: int
    message: str = "Leads uploaded and processed successfully"

