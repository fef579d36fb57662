"""Identity token encoding and verification."""

from .token_codec import ALGORITHM, DEFAULT_TTL, TokenCodec

__all__ = ["ALGORITHM", "DEFAULT_TTL", "TokenCodec"]
