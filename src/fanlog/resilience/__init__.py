"""Resilience – timeouts and bounded retry for network delivery."""
