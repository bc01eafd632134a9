"""
Reminders module - License expiry reminders.

This module handles:
- Threshold matching for expiring licenses
- Exactly-once reminder delivery through a ledger
- Notifier adapters (email, logging)
"""
