"""Game clock domain"""
from .state import GameState, GameStateAggregator

__all__ = ['GameState', 'GameStateAggregator']
