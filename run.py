#!/usr/bin/env python3
"""
run.py - Main entry point for the Connect Four engine

Examples:

    # Play against the negamax AI
    python run.py play

    # Two human players
    python run.py play --ai none

    # Analyze a serialized position (42 symbols, row-major from the top)
    python run.py analyze --state 000000000000000000000000000000000001111000

    # Time the search on 500 random positions with debug output
    python run.py --debug benchmark --iterations 500
"""

import sys

from connect4_engine.interfaces.cli import main

if __name__ == "__main__":
    sys.exit(main())
