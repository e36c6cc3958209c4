"""Client-side search over already-loaded collections."""


def matches(term: str, *fields: str | None) -> bool:
    """Return True when ``term`` is a case-insensitive substring of any field.

    An empty term matches everything, so filtering with it leaves a collection
    unchanged.
    """
    if not term:
        return True
    needle = term.lower()
    return any(field and needle in field.lower() for field in fields)
