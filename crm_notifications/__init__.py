"""Notification derivation engine for the CRM.

Derives a ranked, de-duplicated alert feed from task and deal snapshots and a
user's notification preferences.
"""
