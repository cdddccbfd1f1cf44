"""
connect4_engine - Rules and AI engine for a gravity-based Connect Four

This package provides the board representation and its serialized form,
gravity-aware placement, four-in-a-row and draw detection, and a negamax
search that picks the computer player's column. Any turn driver can sit on
top of it: the bundled CLI, a gymnasium environment, or a host game engine.
"""

# Version number
__version__ = '0.1.0'
