"""
connect4_engine.ai - Move selection for the computer player

This package provides the negamax search and the static evaluation
strategies it scores leaf positions with.
"""

from connect4_engine.ai.evaluation import Evaluator, HeuristicEvaluator, NullEvaluator
from connect4_engine.ai.negamax import NegamaxPlayer

__all__ = ['Evaluator', 'HeuristicEvaluator', 'NullEvaluator', 'NegamaxPlayer']
