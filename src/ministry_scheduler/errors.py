"""Errors raised by roster and matrix stores."""


class StoreError(Exception):
    """A read or write against the backing spreadsheet or files failed."""


class MissingResourceError(StoreError):
    """A required sheet, tab or file does not exist."""

    def __init__(self, resource: str):
        self.resource = resource
        super().__init__(f"required resource not found: {resource}")
