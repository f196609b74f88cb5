"""Storefront visibility shared by categories and products."""

from enum import Enum


class CatalogueStatus(Enum):
    """Only active records are shown on the public storefront."""

    ACTIVE = "active"
    INACTIVE = "inactive"

    @classmethod
    def parse(cls, value, default=None):
        """Coerce loose form input (``"active"``, ``"Inactive"``...) into a status value."""
        if value is None or value == "":
            return default
        normalized = str(value).strip().lower()
        if normalized == cls.INACTIVE.value:
            return cls.INACTIVE.value
        return cls.ACTIVE.value
