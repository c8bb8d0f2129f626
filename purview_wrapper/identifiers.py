"""Content-entry identifiers."""

import uuid


def generate_guid() -> str:
    """Return a random version-4 UUID string, e.g. ``3f2b...-4xxx-[89ab]xxx-...``.

    Only used to tell content entries apart; not a security token.
    """
    return str(uuid.uuid4())
