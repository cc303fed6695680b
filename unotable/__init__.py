"""
Unotable - Uno table engine with an HTTP API

A single-table engine for Uno-style card games. It provides:
- The 108-card deck and fair shuffling
- Turn order with direction reversal
- Move legality and special-card effects
- Reshuffling the discard pile when the deck runs out
- A FastAPI surface under /api/uno
"""

__version__ = "0.1.0"
