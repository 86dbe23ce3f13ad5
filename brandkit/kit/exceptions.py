"""
Errors raised by the brand kit engine.

Malformed or partial input never raises: it degrades to schema defaults.
These exceptions are reserved for caller mistakes (asking for a section or
field path that the schema does not define).
"""


class BrandKitError(ValueError):
    """Base class for brand kit programmer errors."""


class UnknownSectionError(BrandKitError):
    """Raised when a section id is not one of the fixed kit sections."""

    def __init__(self, section_id: str):
        self.section_id = section_id
        super().__init__(f"Unknown brand kit section: {section_id!r}")


class UnknownFieldPathError(BrandKitError):
    """Raised when a path does not address a field leaf of the schema."""

    def __init__(self, path: str, reason: str = "not a field path"):
        self.path = path
        super().__init__(f"Invalid brand kit field path {path!r}: {reason}")
