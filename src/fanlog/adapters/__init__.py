"""Adapters – concrete integrations with third-party services."""
