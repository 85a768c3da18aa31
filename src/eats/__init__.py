"""
Eats Backend
GraphQL API for a food-delivery marketplace
"""

__version__ = "0.1.0"

from .config import settings

__all__ = ["settings", "__version__"]
