"""
Automated players for the minefield game.

Provides agents that answer a session with intents:
- RandomAgent: Baseline random reveals
- LogicAgent: Constraint propagation with risk-based guessing
"""
from .base_agent import BaseAgent
from .random_agent import RandomAgent
from .logic_agent import LogicAgent, Constraint
from .evaluation import Evaluator, EpisodeStats

__all__ = [
    "BaseAgent",
    "RandomAgent",
    "LogicAgent",
    "Constraint",
    "Evaluator",
    "EpisodeStats",
]
