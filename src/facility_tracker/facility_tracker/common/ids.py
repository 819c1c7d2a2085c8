from __future__ import annotations

import random
import string
from typing import Collection

from ..core.constants import LOCAL_ID_LENGTH

_ALPHABET = string.digits + string.ascii_lowercase


def new_local_id(existing: Collection[str] = ()) -> str:
    """Random base-36 identifier for records synthesized on this side."""
    while True:
        candidate = "".join(random.choice(_ALPHABET) for _ in range(LOCAL_ID_LENGTH))
        if candidate not in existing:
            return candidate
