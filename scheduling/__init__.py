"""
Scheduling module for TicTacToe.
Delayed callbacks used to pace the AI's moves.
"""

from .base import Scheduler, TaskHandle
from .manual import ImmediateScheduler, ManualScheduler
from .tk_scheduler import TkScheduler
