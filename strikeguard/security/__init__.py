"""Audit trail for moderation decisions."""
