import secrets
import string
from datetime import datetime, timezone
from typing import Callable

_ALPHABET = string.ascii_letters + string.digits


def id_generator(prefix: str, length: int) -> Callable[[], str]:
    """Return a factory producing ids like ``<prefix>_<random chars>``."""

    def generate() -> str:
        suffix = "".join(secrets.choice(_ALPHABET) for _ in range(length))
        return f"{prefix}_{suffix}"

    return generate


def utcnow() -> datetime:
    return datetime.now(timezone.utc)
