"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── ApplicationError     (application.py)
    │   └── ConfigurationError
    │       ├── MissingRequiredSettingError   (fanlog.config.validation)
    │       └── InvalidSettingValueError      (fanlog.config.validation)
    └── InfrastructureError  (infrastructure.py)
        ├── TimeoutError
        ├── ExternalServiceError
        └── DeliveryError
"""

from fanlog.kernel.errors.application import ApplicationError, ConfigurationError
from fanlog.kernel.errors.base import BaseError
from fanlog.kernel.errors.infrastructure import (
    DeliveryError,
    ExternalServiceError,
    InfrastructureError,
    TimeoutError,
)

__all__ = [
    "ApplicationError",
    "BaseError",
    "ConfigurationError",
    "DeliveryError",
    "ExternalServiceError",
    "InfrastructureError",
    "TimeoutError",
]
