"""Resilience – bounded retry."""
from fanlog.resilience.retry.tenacity_adapter import TenacityRetryPolicy

__all__ = ["TenacityRetryPolicy"]
