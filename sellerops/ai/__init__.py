"""AI modules for command classification and intent resolution."""

from .llm_client import LLMClient
from .classifier import Classifier, LLMClassifier
from .resolver import IntentResolver

__all__ = ["LLMClient", "Classifier", "LLMClassifier", "IntentResolver"]
