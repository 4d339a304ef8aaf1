# Language-model access
from .client import LLMClient, SamplingConfig
from .retry import RetryPolicy
