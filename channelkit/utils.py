import uuid


def to_slug(text: str) -> str:
    """Convert text to slug format: lowercase, no spaces.

    Example: "Intro" -> "intro"
    """
    return text.lower().replace(" ", "")


def new_id() -> str:
    """Unique id for jobs and history items."""
    return uuid.uuid4().hex


def download_filename(kind: str, item_id: str, extension: str) -> str:
    """Filename for a generated artifact, e.g. generated-logo-<id>.png."""
    return f"generated-{to_slug(kind)}-{item_id}.{extension}"
