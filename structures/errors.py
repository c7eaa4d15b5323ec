class StructureError(ValueError):
    """An editing operation was rejected by a data structure."""


class CapacityError(StructureError):
    """Stack overflow / queue full."""


class EmptyStructureError(StructureError):
    """Stack underflow / queue empty / nothing to delete."""
