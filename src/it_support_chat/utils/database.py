import uuid


def generate_uid() -> str:
    """Return a random identifier that stays unique across rapid successive calls."""
    return str(uuid.uuid4())
