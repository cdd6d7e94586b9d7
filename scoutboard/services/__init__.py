"""
Services package for the scoutboard client.

Services talk to the backend through WebAppClient and hand the results to
the pure ranking, trend and scout level code.
"""

from .base import BaseService
from .backend_client import WebAppClient
from .leaderboard import LeaderboardService
from .profile import ProfileService
from .session_store import SessionManager, create_session_store

__all__ = ['BaseService', 'WebAppClient', 'LeaderboardService', 'ProfileService', 'SessionManager',
           'create_session_store']
