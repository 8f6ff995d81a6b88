"""
Vaxbot - posts UK and Canada vaccination stats into a Telegram chat.
"""

__version__ = "0.3.0"
