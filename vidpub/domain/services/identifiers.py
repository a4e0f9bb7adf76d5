"""Random identifiers for staged files and object keys."""
from typing import Optional

from nanoid import generate

# nanoid draws from os.urandom; 43 symbols of a 64-symbol alphabet is 258 bits.
RANDOM_ID_SIZE = 43


def random_id() -> str:
    """Return a fresh URL- and filename-safe identifier."""
    return generate(size=RANDOM_ID_SIZE)


def build_object_key(extension: str, prefix: Optional[str] = None) -> str:
    """Build ``[<prefix>/]<random-id>.<ext>``."""
    name = f"{random_id()}.{extension}"
    return f"{prefix}/{name}" if prefix else name
