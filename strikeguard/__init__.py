"""Strikeguard: automated content moderation and strike escalation."""

__version__ = "0.1.0"
