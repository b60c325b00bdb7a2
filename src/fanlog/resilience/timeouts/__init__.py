"""Resilience – timeout policies."""
from fanlog.resilience.timeouts.policy import TimeoutPolicy

__all__ = ["TimeoutPolicy"]
