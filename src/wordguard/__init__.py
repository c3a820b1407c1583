"""WordGuard: kicks Telegram group members who use forbidden words."""

__version__ = "1.0.0"
