"""Column value conversion for rows returned by PostgREST."""


def to_float(value: object) -> float | None:
    """Convert a numeric column value, keeping nulls."""
    if value is None:
        return None
    return float(value)


def to_quantity(value: object) -> int | float:
    """Convert a quantity column, keeping whole numbers as integers."""
    if value is None:
        return 0
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    number = float(value)
    return int(number) if number.is_integer() else number
