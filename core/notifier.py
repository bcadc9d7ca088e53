"""
Notification routing and fan-out

Routers map a symbol, a session name or an arbitrary object to a channel name.
``Notifiability`` keeps the registered notifiers and broadcasts every message
to each of them, in registration order.
"""

import logging
import re
import threading
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional, Pattern, Tuple

from config.base_config import NotificationConfig


ObjectRoute = Callable[[Any], Tuple[str, bool]]


class Notifier(ABC):
    """Delivery backend (chat client, log sink, ...)"""

    @abstractmethod
    def notify_to(self, channel: str, fmt: str, *args: Any) -> None:
        pass

    @abstractmethod
    def notify(self, fmt: str, *args: Any) -> None:
        pass


class NullNotifier(Notifier):
    """Notifier that drops every message"""

    def notify_to(self, channel: str, fmt: str, *args: Any) -> None:
        pass

    def notify(self, fmt: str, *args: Any) -> None:
        pass


class LogNotifier(Notifier):
    """Notifier writing messages to a logger, mostly useful for dry runs"""

    def __init__(self, logger: Optional[logging.Logger] = None, level: int = logging.INFO):
        self.logger = logger or logging.getLogger("notifier")
        self.level = level

    def notify_to(self, channel: str, fmt: str, *args: Any) -> None:
        self.logger.log(self.level, "[%s] %s", channel, _format(fmt, args))

    def notify(self, fmt: str, *args: Any) -> None:
        self.logger.log(self.level, "%s", _format(fmt, args))


def _format(fmt: str, args: Tuple[Any, ...]) -> str:
    return fmt % args if args else fmt


class PatternChannelRouter:
    """
    Routes a name to the channel of the first matching regular expression.

    Patterns are tried in insertion order and may match anywhere in the
    name; anchor them with ``^`` or ``$`` as needed.
    """

    def __init__(self, routes: Optional[Dict[str, str]] = None):
        self._routes: List[Tuple[Pattern[str], str]] = []
        for pattern, channel in (routes or {}).items():
            self.add_route(pattern, channel)

    def add_route(self, pattern: str, channel: str) -> None:
        self._routes.append((re.compile(pattern), channel))

    def route(self, name: str) -> Tuple[str, bool]:
        for pattern, channel in self._routes:
            if pattern.search(name):
                return channel, True
        return "", False

    def __len__(self) -> int:
        return len(self._routes)


class ObjectChannelRouter:
    """Asks each route function in turn; the first one returning found wins"""

    def __init__(self) -> None:
        self._routes: List[ObjectRoute] = []

    def add_route(self, route: ObjectRoute) -> None:
        self._routes.append(route)

    def route(self, obj: Any) -> Tuple[str, bool]:
        for route in self._routes:
            channel, ok = route(obj)
            if ok:
                return channel, True
        return "", False


class Notifiability:
    """
    Notifier fan-out with channel routing.

    ``notify`` and ``notify_to`` may be called from several threads, and
    ``add_notifier`` may run concurrently with them: the notifier list is
    copied on write and broadcasts iterate over a snapshot.
    """

    def __init__(
        self,
        symbol_router: Optional[PatternChannelRouter] = None,
        session_router: Optional[PatternChannelRouter] = None,
        object_router: Optional[ObjectChannelRouter] = None,
    ):
        self.symbol_channel_router = PatternChannelRouter() if symbol_router is None else symbol_router
        self.session_channel_router = PatternChannelRouter() if session_router is None else session_router
        self.object_channel_router = ObjectChannelRouter() if object_router is None else object_router
        self._notifiers: Tuple[Notifier, ...] = ()
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config: Optional[NotificationConfig]) -> "Notifiability":
        """
        Build the symbol and session routers from the ``notifications`` section.

        ``notifications.routing`` names channels per object kind (trade, order,
        ...). Those objects belong to the trading runtime, which adds its own
        routes to ``object_channel_router``; the router starts empty here.
        """
        if config is None:
            return cls()

        return cls(
            symbol_router=PatternChannelRouter(config.symbol_channels),
            session_router=PatternChannelRouter(config.session_channels),
        )

    def route_symbol(self, symbol: str) -> Tuple[str, bool]:
        """Route a symbol name to a channel"""
        return self.symbol_channel_router.route(symbol)

    def route_session(self, session: str) -> Tuple[str, bool]:
        """Route a session name to a channel"""
        return self.session_channel_router.route(session)

    def route_object(self, obj: Any) -> Tuple[str, bool]:
        """Route an object (trade, order, ...) to a channel"""
        return self.object_channel_router.route(obj)

    def add_notifier(self, notifier: Notifier) -> None:
        with self._lock:
            self._notifiers = self._notifiers + (notifier,)

    @property
    def notifiers(self) -> Tuple[Notifier, ...]:
        return self._notifiers

    def notify(self, fmt: str, *args: Any) -> None:
        for notifier in self._notifiers:
            notifier.notify(fmt, *args)

    def notify_to(self, channel: str, fmt: str, *args: Any) -> None:
        for notifier in self._notifiers:
            notifier.notify_to(channel, fmt, *args)


__all__ = [
    "Notifier",
    "NullNotifier",
    "LogNotifier",
    "PatternChannelRouter",
    "ObjectChannelRouter",
    "Notifiability",
]
