from pasta_core.services.identity import (
    DEFAULT_ID_LENGTH,
    DEFAULT_TOKEN_LENGTH,
    ID_ALPHABET,
    MAX_ID_LENGTH,
    TOKEN_ALPHABET,
    generate_token,
    is_valid_id,
    random_string,
)

__all__ = [
    "DEFAULT_ID_LENGTH",
    "DEFAULT_TOKEN_LENGTH",
    "ID_ALPHABET",
    "MAX_ID_LENGTH",
    "TOKEN_ALPHABET",
    "generate_token",
    "is_valid_id",
    "random_string",
]
