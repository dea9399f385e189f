def to_uppercase(value: str | None) -> str | None:
    """
    Converts a string to uppercase if it's not None.
    """
    if value is None:
        return None
    return value.upper()

def to_lowercase(value: str | None) -> str | None:
    """
    Converts a string to lowercase if it's not None.
    """
    if value is None:
        return None
    return value.lower()

def split_csv(value: str | list[str] | tuple[str, ...] | None) -> list[str] | None:
    """
    Split a comma-separated env value ("red, green,blue") into a list of
    lowercased, stripped names. Lists and tuples are normalised the same way.
    """
    if value is None:
        return None
    items = value.split(",") if isinstance(value, str) else list(value)
    return [str(item).strip().lower() for item in items if str(item).strip()]
