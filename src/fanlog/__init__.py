"""
fanlog – structured log fan-out to independent appenders.

Import path convention::

    from fanlog.observability.logging import Dispatcher, Level
    from fanlog.observability.logging.appenders import ConsoleAppender, FileAppender
    from fanlog.adapters.messagebird import MessageBirdClient
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
