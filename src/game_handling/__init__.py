"""Exports the coordinator classes to make them easier to import"""

from game_handling.game_admin import GameAdmin, SessionSummary
from game_handling.game_notifications import GameNotifications
