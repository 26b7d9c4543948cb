"""
Byte/text codecs used by the token parser and serializer.
"""

from .base64url import Base64urlError, b64url_decode, b64url_encode
from .json_codec import JsonCodecError, JsonObject, decode_object, encode_object, stringify

__all__ = [
    "Base64urlError",
    "b64url_decode",
    "b64url_encode",
    "JsonCodecError",
    "JsonObject",
    "decode_object",
    "encode_object",
    "stringify",
]
