"""Moderation core: scanning, strike weighting, escalation and account state.

This package provides:
- Scanner: runs a rule catalog against content
- Strikes: per-scan strike weight with a cap
- Escalation: maps cumulative strikes to an account action tier
- Updater: persists outcomes through atomic store primitives
- Expiry: lifts restrictions and suspensions after fixed windows
"""
