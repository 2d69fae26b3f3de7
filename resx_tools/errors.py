from __future__ import annotations


class ResxError(RuntimeError):
    """Base class for problems reported by resx_tools."""


class HintError(ResxError):
    """A hints document is missing a required name or preferred value."""


class MalformedResourceError(ResxError):
    """A typed resource value does not have the expected ``path;type`` fields."""
