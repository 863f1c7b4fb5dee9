"""Record ID generation with collision detection"""

import random
import string
import time
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from .migrations import get_project_config

# Short per-entity tags embedded in generated IDs
KIND_TAGS = {
    "users": "u",
    "boards": "b",
    "columns": "c",
    "tasks": "t",
}

def generate_random_string(length: int = 6) -> str:
    """Generate random alphanumeric string"""
    # Use lowercase letters and numbers for readability
    chars = string.ascii_lowercase + string.digits
    return ''.join(random.choice(chars) for _ in range(length))

def record_exists(session: Session, model, record_id: str) -> bool:
    """Check if a record ID is already taken"""
    return session.execute(
        select(model.id).where(model.id == record_id)
    ).first() is not None

def generate_record_id(session: Session, model, prefix: Optional[str] = None) -> str:
    """Generate unique ID for a new ``model`` row, e.g. ``tb-t-k3v9qa``

    ``prefix`` defaults to the project's ``id_prefix``.
    """
    if prefix is None:
        prefix = get_project_config().get("id_prefix", "tb")
    tag = KIND_TAGS.get(model.__tablename__, "x")

    # Try up to 10 times to generate a unique ID
    for _ in range(10):
        candidate_id = f"{prefix}-{tag}-{generate_random_string(6)}"
        if not record_exists(session, model, candidate_id):
            return candidate_id

    # If we still have collisions after 10 tries, use a longer suffix
    candidate_id = f"{prefix}-{tag}-{generate_random_string(12)}"

    # This should be extremely unlikely to collide
    if record_exists(session, model, candidate_id):
        # Last resort: add timestamp
        timestamp = str(int(time.time()))[-4:]
        candidate_id = f"{candidate_id}-{timestamp}"

    return candidate_id
