"""
Canvas LMS interaction module.

Handles the provider interface, the REST client and the offline preview data.
"""

from .provider import ContentProvider
from .client import CanvasClient, check_network
from .preview import PreviewProvider

__all__ = [
    "ContentProvider",
    "CanvasClient",
    "check_network",
    "PreviewProvider",
]
