"""
Compact-serialization parser: ``header.payload.signature`` text to ``Token``.
"""

from typing import Union

from .codec import Base64urlError, JsonCodecError, JsonObject, b64url_decode, decode_object
from .model.token import SignatureInfo, Token
from .shared.errors import DecodeError, EncodingError, FormatError


def _b64_segment(segment: str, label: str) -> bytes:
    try:
        return b64url_decode(segment)
    except Base64urlError as exc:
        raise EncodingError(label, f"{label} is not valid base64url: {exc}") from exc


def _json_segment(data: bytes, label: str) -> JsonObject:
    try:
        return decode_object(data)
    except JsonCodecError as exc:
        raise DecodeError(label, f"could not decode {label}: {exc}") from exc


def parse(text: Union[str, bytes]) -> Token:
    """
    Parse a compact token into its header, payload and signature.

    No signature or claim is checked here; parsing is pure and only rejects
    input that is not a structurally valid token.

    Raises:
        FormatError: wrong number of segments, or ``alg`` missing/not a string.
        EncodingError: a segment is not unpadded base64url.
        DecodeError: header or payload is not a UTF-8 JSON object.
    """
    if isinstance(text, (bytes, bytearray)):
        try:
            text = bytes(text).decode("ascii")
        except UnicodeDecodeError as exc:
            raise EncodingError("token", "token is not ASCII text") from exc

    parts = text.split(".")
    if len(parts) != 3:
        raise FormatError(f"expected 3 parts, found {len(parts)}", {"parts": len(parts)})

    header_segment, payload_segment, signature_segment = parts

    header_bytes = _b64_segment(header_segment, "header")
    payload_bytes = _b64_segment(payload_segment, "payload")

    header = _json_segment(header_bytes, "header")
    payload = _json_segment(payload_bytes, "payload")

    algorithm = header.get("alg")
    if not isinstance(algorithm, str):
        raise FormatError("header 'alg' must be present and a string", {"claim": "alg"})

    signature = _b64_segment(signature_segment, "signature")

    return Token(
        header=header,
        payload=payload,
        signature=SignatureInfo(
            algorithm=algorithm,
            value=signature,
            # the text as received, not a re-encoding of header/payload
            message=f"{header_segment}.{payload_segment}".encode("utf-8"),
        ),
    )
