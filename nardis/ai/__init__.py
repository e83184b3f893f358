"""Computer player strategies for Nardis."""

from .base_ai import BaseAI
from .rule_based_ai import RuleBasedAI

__all__ = [
    "BaseAI",
    "RuleBasedAI",
]
