"""
In-process publish/subscribe channel.

Delivery is best-effort: each published event goes once to every handler
subscribed to its topic at publish time, in subscription order. A failing
handler is logged and skipped; the remaining handlers still receive the
event. Nothing is queued or retried.
"""

import inspect
import itertools
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Union

from spherical.utils import Logger

logger = Logger("events")

Handler = Callable[[Any], Union[Awaitable[None], None]]


@dataclass(frozen=True)
class Subscription:
    topic: str
    token: int


class EventChannel:
    def __init__(self):
        self._handlers: dict[str, dict[int, Handler]] = {}
        self._tokens = itertools.count(1)

    def subscribe(self, topic: str, handler: Handler) -> Subscription:
        token = next(self._tokens)
        self._handlers.setdefault(topic, {})[token] = handler
        return Subscription(topic, token)

    def unsubscribe(self, subscription: Subscription) -> bool:
        handlers = self._handlers.get(subscription.topic, {})
        return handlers.pop(subscription.token, None) is not None

    def subscriber_count(self, topic: str) -> int:
        return len(self._handlers.get(topic, {}))

    async def publish(self, topic: str, payload: Any) -> int:
        """Deliver `payload` to the topic's handlers; returns successful deliveries."""
        delivered = 0
        for token, handler in list(self._handlers.get(topic, {}).items()):
            try:
                result = handler(payload)
                if inspect.isawaitable(result):
                    await result
            except Exception as exc:
                logger.error(f"Handler {token} on '{topic}' failed: {exc}")
                continue
            delivered += 1
        return delivered
