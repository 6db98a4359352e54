"""Messages feature."""

from .router import router
from .service import MessageService

__all__ = ["MessageService", "router"]
