"""Game clock commands"""
from .process_game_tick import ProcessGameTickCommand, ProcessGameTickHandler
from .advance_game_tick import AdvanceGameTickCommand, AdvanceGameTickHandler

__all__ = [
    'ProcessGameTickCommand',
    'ProcessGameTickHandler',
    'AdvanceGameTickCommand',
    'AdvanceGameTickHandler',
]
