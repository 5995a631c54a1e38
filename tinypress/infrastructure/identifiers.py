"""Short random identifiers for new articles.

Identifiers are drawn uniformly from ``[a-zA-Z0-9]``. The generator does not
check uniqueness; callers that need it (ArticleService) retry against the store.
"""

import random
import string
import threading

ALPHANUMERIC = string.ascii_letters + string.digits
DEFAULT_LENGTH = 8


class IdentifierGenerator:
    """Thread-safe generator of fixed-length alphanumeric identifiers.

    The underlying ``random.Random`` is seeded once at construction; pass
    ``rng`` to make the sequence deterministic in tests.
    """

    def __init__(
        self,
        length: int = DEFAULT_LENGTH,
        alphabet: str = ALPHANUMERIC,
        rng: random.Random | None = None,
    ):
        if length < 1:
            raise ValueError("Identifier length must be positive")
        if not alphabet:
            raise ValueError("Identifier alphabet must not be empty")
        self._length = length
        self._alphabet = alphabet
        self._symbols = frozenset(alphabet)
        self._rng = rng or random.Random()
        self._lock = threading.Lock()

    @property
    def length(self) -> int:
        return self._length

    def generate(self) -> str:
        """Return a new identifier of ``length`` symbols."""
        with self._lock:
            return "".join(self._rng.choices(self._alphabet, k=self._length))

    def is_valid(self, identifier: str | None) -> bool:
        """True when ``identifier`` could have been produced by this generator."""
        if not identifier or len(identifier) != self._length:
            return False
        return all(ch in self._symbols for ch in identifier)


_default_generator = IdentifierGenerator()


def generate_id() -> str:
    """Generate an identifier with the process-wide default generator."""
    return _default_generator.generate()
