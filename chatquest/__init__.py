"""
Chat Quest.

Gamification add-ons for a chat bot: message-XP leveling and an RPG-style
adventure mini-game, built on a shared per-user record.
"""

__version__ = "0.1.0"
