import logging

from ..schemas.notification import Notification

logger = logging.getLogger(__name__)


class Notifier:
    """
    Collects the notifications produced while handling one request.

    Every message is logged as well, so soft failures that only reach the
    user as a toast still leave a trace on the server.
    """

    def __init__(self):
        self._items: list[Notification] = []

    def success(self, message: str) -> None:
        logger.info(message)
        self._items.append(Notification(level="success", message=message))

    def info(self, message: str) -> None:
        logger.info(message)
        self._items.append(Notification(level="info", message=message))

    def error(self, message: str) -> None:
        logger.warning(message)
        self._items.append(Notification(level="error", message=message))

    @property
    def items(self) -> list[Notification]:
        return list(self._items)

    def has_errors(self) -> bool:
        return any(item.level == "error" for item in self._items)

    def drain(self) -> list[Notification]:
        """Return and forget the collected notifications."""
        items, self._items = self._items, []
        return items


def get_notifier() -> Notifier:
    return Notifier()
