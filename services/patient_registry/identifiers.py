"""Patient identifier generation strategies."""

from __future__ import annotations

import random
import time
import uuid
from typing import Callable

__all__ = [
    "ID_PREFIX",
    "IdGenerator",
    "generate_id",
    "generate_uuid_id",
    "get_id_generator",
]

ID_PREFIX = "PAT"

IdGenerator = Callable[[], str]


def generate_id(
    *,
    clock: Callable[[], float] = time.time,
    rng: random.Random | None = None,
) -> str:
    """Return ``PAT-<epoch-ms>-<0..999>``.

    Two calls in the same millisecond collide with probability 1/1000.
    """

    millis = int(clock() * 1000)
    suffix = (rng or random).randrange(1000)
    return f"{ID_PREFIX}-{millis}-{suffix}"


def generate_uuid_id() -> str:
    """Return ``PAT-<32 hex chars>`` backed by a random 128-bit value."""

    return f"{ID_PREFIX}-{uuid.uuid4().hex}"


_STRATEGIES: dict[str, IdGenerator] = {
    "timestamp": generate_id,
    "uuid": generate_uuid_id,
}


def get_id_generator(strategy: str) -> IdGenerator:
    """Return the generator registered under ``strategy``."""

    try:
        return _STRATEGIES[strategy]
    except KeyError:
        known = ", ".join(sorted(_STRATEGIES))
        raise ValueError(
            f"Unknown identifier strategy '{strategy}' (expected one of: {known})"
        ) from None
