import hashlib
import secrets

from constants import UTF8

TOKEN_PREFIX = "grlm_"


def generate_token() -> str:
    """Generate a new project API token.

    Returns:
        URL-safe random token with the service prefix.

    """
    return f"{TOKEN_PREFIX}{secrets.token_urlsafe(32)}"


def hash_token(token: str) -> str:
    """Hash an API token for storage and lookup.

    Args:
        token: The plain API token.

    Returns:
        Hex encoded SHA-256 digest.

    """
    return hashlib.sha256(token.encode(UTF8)).hexdigest()
