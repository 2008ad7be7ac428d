"""Enhancement strategies (implementations of IEnhancementStrategy)."""

from src.providers.enhancement.llm_strategy import LLMEnhancementStrategy
from src.providers.enhancement.rule_based import RuleBasedEnhancementStrategy

__all__ = ["LLMEnhancementStrategy", "RuleBasedEnhancementStrategy"]
