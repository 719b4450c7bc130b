from .base import ActionHandler
from .registry import HandlerRegistry, default_registry

__all__ = ["ActionHandler", "HandlerRegistry", "default_registry"]
