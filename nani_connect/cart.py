from .utils.notifications import Notifier


class Cart:
    """
    Ordered, in-memory list of products a buyer picked.
    Lives only as long as its owner; nothing here is persisted.
    """

    def __init__(self, notifier: Notifier | None = None):
        self._items: list[dict] = []
        self._notifier = notifier

    def add(self, product: dict, announce: bool = True) -> None:
        self._items.append(product)
        if announce and self._notifier is not None:
            self._notifier.success(f"{product.get('name', 'Item')} added to cart!")

    def clear(self) -> None:
        self._items.clear()

    @property
    def items(self) -> list[dict]:
        return list(self._items)

    @property
    def total(self) -> float:
        return round(sum(float(item.get("price") or 0) for item in self._items), 2)

    def __len__(self) -> int:
        return len(self._items)
