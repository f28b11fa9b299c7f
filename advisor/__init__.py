from .adapter import PromptDecisionOracle, build_decision_prompt, parse_decision
from .heuristic import RuleBasedOracle, RuleThresholds

__all__ = [
    "PromptDecisionOracle",
    "RuleBasedOracle",
    "RuleThresholds",
    "build_decision_prompt",
    "parse_decision",
]
