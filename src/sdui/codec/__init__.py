"""JSON codec for component documents."""

from .serializer import SduiCodec, default_codec, decode, decode_many, encode

__all__ = [
    "SduiCodec",
    "default_codec",
    "decode",
    "decode_many",
    "encode",
]
