"""VehicleSummary class for vehicle identification."""

from typing import Optional


class VehicleSummary:
    """Identity fields of a fleet vehicle."""

    def __init__(
        self,
        id: str,
        code: str,
        brand: Optional[str] = None,
        model: Optional[str] = None,
        active: bool = True,
    ):
        self.id = id
        self.code = code
        self.brand = brand
        self.model = model
        self.active = active

    @property
    def name(self) -> str:
        """Human-readable vehicle name."""
        description = " ".join(p for p in (self.brand, self.model) if p)
        return f"{self.code} ({description})" if description else self.code
