# factory_ops/utils/ids.py

import random
import string
import uuid


def generate_id() -> str:
    """Short random id for new document rows."""
    return uuid.uuid4().hex[:9]


def random_suffix(length: int = 3) -> str:
    """Uppercase alphanumeric suffix, used in job ids."""
    alphabet = string.ascii_uppercase + string.digits
    return "".join(random.choice(alphabet) for _ in range(length))


def next_sequence_number(prefix: str, existing_numbers, width: int = 3) -> str:
    """prefix + (highest numeric suffix among existing numbers with that prefix + 1)."""
    highest = 0
    for number in existing_numbers:
        if not number or not number.startswith(prefix):
            continue
        suffix = number[len(prefix):]
        if suffix.isdigit():
            highest = max(highest, int(suffix))
    return f"{prefix}{highest + 1:0{width}d}"
