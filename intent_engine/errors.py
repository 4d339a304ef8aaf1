"""
Exception types raised by the scoring engine
"""

from typing import List


class IntentEngineError(Exception):
    """Base class for expected engine failures"""
    status_code = 500


class ResolutionError(IntentEngineError):
    """An offer or lead referenced by a scoring request does not exist"""
    status_code = 404


class OfferNotFoundError(ResolutionError):
    def __init__(self, offer_id: str):
        self.offer_id = offer_id
        super().__init__(f"Offer with ID {offer_id} not found.")


class LeadsNotFoundError(ResolutionError):
    def __init__(self, missing_ids: List[str]):
        self.missing_ids = list(missing_ids)
        super().__init__(f"Some leads not found: {', '.join(self.missing_ids)}")


class LLMNotConfiguredError(IntentEngineError):
    """No API key is available for the language-model provider"""


class AIProviderError(IntentEngineError):
    """The language-model call failed after every retry attempt"""
    status_code = 502

    def __init__(self, attempts: int, last_error: Exception):
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(f"Failed to get AI intent after {attempts} attempts: {last_error}")


class CSVValidationError(IntentEngineError):
    """Uploaded CSV could not be parsed or is missing required headers"""
    status_code = 400
