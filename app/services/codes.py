from __future__ import annotations

import secrets

from app.services.errors import GeneratorFailure

# No I, O, i, l, o (and friends) to keep codes readable aloud
CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZabcdefghjkmnpqrstuvwxyz0123456789"
CODE_LENGTH = 6


def generate_code(length: int = CODE_LENGTH) -> str:
    """Return a random code drawn from the OS CSPRNG.

    Raises GeneratorFailure if the entropy source is unavailable; there is no
    fallback to a seeded generator.
    """
    try:
        return "".join(secrets.choice(CODE_ALPHABET) for _ in range(length))
    except (OSError, NotImplementedError) as e:
        raise GeneratorFailure() from e
