# Scoring stages module
from .role_classification import RoleClassifier
from .industry_matching import IndustryMatcher
from .data_completeness import CompletenessChecker
from .rule_scoring import RuleScorer
from .ai_scoring import AIScorer
