from __future__ import annotations

import secrets
import string

ID_ALPHABET = string.ascii_letters + string.digits
TOKEN_ALPHABET = ID_ALPHABET + "-._~"

DEFAULT_ID_LENGTH = 8
DEFAULT_TOKEN_LENGTH = 20
# Longest name a single path segment may have on common filesystems.
MAX_ID_LENGTH = 255


def random_string(length: int, alphabet: str = TOKEN_ALPHABET) -> str:
    if length < 1:
        raise ValueError("length must be positive")
    return "".join(secrets.choice(alphabet) for _ in range(length))


def generate_token(length: int = DEFAULT_TOKEN_LENGTH) -> str:
    return random_string(length, TOKEN_ALPHABET)


def is_valid_id(value: str) -> bool:
    return 0 < len(value) <= MAX_ID_LENGTH and all(ch in ID_ALPHABET for ch in value)
