"""
Postboard API
Posts, comments and caller identity behind a single GraphQL endpoint
"""

__version__ = "0.1.0"

from .config import settings

__all__ = ["settings", "__version__"]
