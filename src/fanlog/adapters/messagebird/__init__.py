"""MessageBird adapter – SMS gateway client."""
from fanlog.adapters.messagebird.client import MessageBirdClient, MessageBirdConfig

__all__ = ["MessageBirdClient", "MessageBirdConfig"]
