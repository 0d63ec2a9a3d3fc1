from ._builder import SearchCommand
from ._models import Order, SearchableFields, SearchableModel, SearchSource

__all__ = [
    "Order",
    "SearchCommand",
    "SearchSource",
    "SearchableFields",
    "SearchableModel",
]
