"""A broker that owns named exchanges and routes published messages."""

from __future__ import annotations

from typing import Callable, Optional

from .exchange import DirectExchange, Exchange, ExchangeType, FanoutExchange, TopicExchange
from .message import Message
from .message_queue import Queue

_FACTORIES: dict[ExchangeType, Callable[[str], Exchange]] = {
    ExchangeType.DIRECT: DirectExchange,
    ExchangeType.TOPIC: TopicExchange,
    ExchangeType.FANOUT: FanoutExchange,
}


class Broker:
    """Keeps exchanges by name and forwards bindings and messages to them."""

    def __init__(self) -> None:
        self._exchanges: dict[str, Exchange] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._exchanges

    def __len__(self) -> int:
        return len(self._exchanges)

    def create_exchange(self, name: str, exchange_type: ExchangeType) -> Exchange:
        """Create and return a new exchange of *exchange_type* called *name*."""
        if name in self._exchanges:
            raise ValueError("Exchange already exists")
        factory = _FACTORIES.get(exchange_type)
        if factory is None:
            raise ValueError("Invalid exchange type")
        exchange = factory(name)
        self._exchanges[name] = exchange
        return exchange

    def get_exchange(self, name: str) -> Exchange:
        """Return the exchange called *name*."""
        try:
            return self._exchanges[name]
        except KeyError:
            raise ValueError("Exchange does not exist") from None

    def delete_exchange(self, name: str) -> None:
        """Remove the exchange called *name*."""
        if name not in self._exchanges:
            raise ValueError("Exchange does not exist")
        del self._exchanges[name]

    def bind_queue(
        self, exchange_name: str, queue: Queue, binding_key: Optional[str] = None
    ) -> None:
        """Bind *queue* to the named exchange under *binding_key*."""
        self.get_exchange(exchange_name).bind_queue(queue, binding_key)

    def unbind_queue(
        self, exchange_name: str, queue: Queue, binding_key: Optional[str] = None
    ) -> None:
        """Remove the binding of *queue* from the named exchange."""
        self.get_exchange(exchange_name).unbind_queue(queue, binding_key)

    def publish(
        self, exchange_name: str, routing_key: Optional[str], message: Message
    ) -> None:
        """Route *message* through the named exchange using *routing_key*."""
        self.get_exchange(exchange_name).route_message(message, routing_key)