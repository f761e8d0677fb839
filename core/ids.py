"""
Alphanumeric record identifiers.

Every domain record carries a fixed-length string key built from a short
type prefix, the last six digits of the current epoch-millisecond timestamp
and random padding drawn from A-Z0-9:

    FM + 482913 + 7QK2ZD  ->  FM4829137QK2ZD

Collisions are not checked here; the primary key constraint rejects them.
"""
import secrets
import string
import time

from django.utils.deconstruct import deconstructible

ID_ALPHABET = string.ascii_uppercase + string.digits
ID_LENGTH = 14
TIMESTAMP_DIGITS = 6

_system_random = secrets.SystemRandom()


def current_millis():
    """Epoch time in milliseconds."""
    return time.time_ns() // 1_000_000


def generate_alphanumeric_id(prefix='', length=ID_LENGTH, clock=None, rng=None):
    """
    Build a record identifier.

    Args:
        prefix: Type prefix, e.g. 'FM' for farms
        length: Total length of the identifier
        clock: Callable returning epoch milliseconds (defaults to the system clock)
        rng: Object with a ``choice`` method (defaults to a SystemRandom)

    Returns:
        str of exactly ``length`` characters
    """
    padding = length - len(prefix) - TIMESTAMP_DIGITS
    if padding < 0:
        raise ValueError(
            f"Prefix '{prefix}' is too long for a {length}-character identifier"
        )

    clock = clock or current_millis
    rng = rng or _system_random

    timestamp = str(clock()).zfill(TIMESTAMP_DIGITS)[-TIMESTAMP_DIGITS:]
    random_part = ''.join(rng.choice(ID_ALPHABET) for _ in range(padding))
    return f'{prefix}{timestamp}{random_part}'


@deconstructible(path='core.ids.IdGenerator')
class IdGenerator:
    """Zero-argument callable bound to a prefix, usable as a model field default."""

    def __init__(self, prefix='', length=ID_LENGTH):
        self.prefix = prefix
        self.length = length

    def __call__(self):
        return generate_alphanumeric_id(self.prefix, self.length)

    def __eq__(self, other):
        return (
            isinstance(other, IdGenerator)
            and self.prefix == other.prefix
            and self.length == other.length
        )

    def __hash__(self):
        return hash((self.prefix, self.length))
