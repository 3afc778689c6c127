"""Encoding layer — the generic plist serializer.

This layer depends only on the stdlib and the config models.
It must never import from domain or services.
"""

from pbxwrite.encoding.contract import Serializable
from pbxwrite.encoding.errors import EncodeError
from pbxwrite.encoding.serializer import Serializer, encode

__all__ = ["EncodeError", "Serializable", "Serializer", "encode"]
