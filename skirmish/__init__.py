"""
Skirmish - Rules Engine for Two-Side Hex Tactics

A deterministic-by-seed rules core for a turn-based, hex-grid combat game.
The engine provides:
- Roster state for two sides (fighters, victory points)
- Intent-driven state mutation (move, attack, heal, victory point)
- Stochastic combat resolution (critical / hit / defended)
- Turn and phase sequencing with end-of-game detection
"""

__version__ = "0.1.0"
