"""Domain entity for a catalogue product and its sales count."""

from dataclasses import dataclass, field
from uuid import uuid4

DEFAULT_CATEGORY = "General"


@dataclass
class Product:
    name: str
    sales: float
    category: str = DEFAULT_CATEGORY
    id: str = field(default_factory=lambda: str(uuid4()))

    def update(
        self,
        name: str | None = None,
        sales: float | None = None,
        category: str | None = None,
    ) -> None:
        """Apply a partial update; omitted fields keep their values."""
        if name is not None:
            self.name = name
        if sales is not None:
            self.sales = sales
        if category is not None:
            self.category = category
