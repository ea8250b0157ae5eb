from __future__ import annotations


class DoxmdError(ValueError):
    """Base class for comments that cannot be translated."""


class AttributeListError(DoxmdError):
    pass
