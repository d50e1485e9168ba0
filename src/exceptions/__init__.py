"""Exports all exceptions to make them easier to import"""

from exceptions.game_exceptions import InvalidMove, ProtocolViolation
from exceptions.general_exceptions import InvalidPort, PeerDisconnected
