"""DTOs for categories."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CategoryResult:
    """Category read-model (result of get_or_create, get_by_id)."""

    id: str
    name: str
