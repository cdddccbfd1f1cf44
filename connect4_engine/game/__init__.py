"""
connect4_engine.game - Core game mechanics for Connect Four

This package contains the board representation, the gravity placement rule,
win/draw detection and game state management. ConnectFourGame lives in
connect4_engine.game.rules and is not imported here, since it depends on
connect4_engine.ai which in turn depends on this package.
"""

from connect4_engine.game.board import BoardState

__all__ = ['BoardState']
