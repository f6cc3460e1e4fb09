"""
Cloud record-sync subscription models.

Builds query and record-zone subscriptions with their push notification
settings and converts them to the wire dictionaries the sync service expects.
"""

__version__ = "0.1.0"
