from typing import Optional


class InvalidParameterError(ValueError):
    """A simulation parameter is missing or outside its allowed range."""
    def __init__(self, key: str, constraint: str, value: Optional[object] = None):
        self.key = key
        self.constraint = constraint
        self.value = value
        message = f"`{key}` {constraint}"
        if value is not None:
            message += f" (got {value!r})"
        super().__init__(message)
