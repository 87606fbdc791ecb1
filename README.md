# aratamq

A small message broker that runs inside your process. Producers publish
messages to named exchanges. The exchanges route the messages into queues.
The queues hand them to registered consumers in round-robin order.

## Install

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Modules

- `aratamq.message` holds the message types.
  - `Metadata` has the fields `message_id`, `timestamp`, `source`, `destination` and `message_type`.
  - `Headers` has the fields `content_type`, `content_encoding` and `custom_headers`, a dict of strings.
  - `Message` is made of metadata, headers and any JSON-compatible payload.
    - Creating a message with an empty metadata field raises `MessageError`, a subclass of `ValueError`.
    - `Message.stringify()` returns compact JSON with sorted keys.
    - `Message.parse(text)` builds a message back from that JSON, and raises `MessageError` on bad input.
- `aratamq.consumer` defines `Consumer`, an abstract base class.
  - Implement `consume(message)` and return `True` to accept a message.
- `aratamq.message_queue` defines `Queue(name, *, max_retries=3, retry_delay=0.1)`, a first-in, first-out queue.
  - Its operations are `enqueue`, `dequeue`, `is_empty()` and `len(queue)`.
  - `register_consumer` and `unregister_consumer` manage its consumers.
  - While any consumer is registered, `enqueue` dispatches every pending message at once, going through the consumers round-robin.
  - A consumer that rejects a message is retried up to `max_retries` times, with a pause of `retry_delay` seconds between tries. After that, the queue moves on to the next consumer.
  - Each rejection is logged as a warning through the standard `logging` module.
  - Invalid operations raise `QueueError`, a subclass of `RuntimeError`. These include dequeuing from an empty queue and registering the same consumer twice.
- `aratamq.exchange` holds the exchanges, whose kinds are listed in `ExchangeType`.
  - `DirectExchange` binds exactly one queue to each routing key.
    - Its helpers are `get_queue(key)` and the `routing_table_size` property.
  - `FanoutExchange` sends every message to every bound queue and takes no keys.
    - Binding the same queue twice has no effect.
    - The `queue_count` property gives the number of bound queues.
  - `TopicExchange` matches routing keys against dot-separated patterns.
    - `*` matches exactly one word.
    - A single `#` at the start or end of a pattern matches any run of words.
    - Its helpers are `try_match_pattern`, `get_queues(pattern)` and `get_queue_size(pattern)`.
- `aratamq.broker` defines `Broker`, which keeps exchanges by name.
  - `create_exchange`, `get_exchange` and `delete_exchange` manage the exchanges.
  - `bind_queue` and `unbind_queue` manage the bindings.
  - `publish(exchange_name, routing_key, message)` sends a message.
  - Only the direct, topic and fanout kinds can be created.
- `aratamq.utils` holds helpers.
  - `validate_routing_key` and `validate_routing_pattern` check keys and patterns.
  - `split_words` splits a string on a separator.
  - `current_timestamp` returns the local time.
- `aratamq.config.ArataMQConfig` and `aratamq.logger.Logger` give the file locations and the process-wide file log used by the commands.

## Example

```python
from aratamq.broker import Broker
from aratamq.exchange import ExchangeType
from aratamq.message import Headers, Message, Metadata
from aratamq.message_queue import Queue

broker = Broker()
broker.create_exchange("events", ExchangeType.TOPIC)

orders = Queue("orders")
broker.bind_queue("events", orders, "order.#")

message = Message(
    Metadata("id-1", "2021-01-01 12:00:00", "shop", "billing", "order"),
    Headers("application/json", "utf-8", {"priority": "high"}),
    {"order": 42},
)
broker.publish("events", "order.created", message)

assert orders.dequeue() == message
```

## Rules and errors

- Routing keys may contain only letters, digits, `.`, `_` and `-`. They may not contain `..`.
- The following raise `ValueError`:
  - invalid keys and invalid patterns;
  - a missing key where one is required;
  - a key given to a fanout exchange;
  - a topic message that matches no pattern;
  - unknown or duplicate exchange names in a `Broker`.
- Conflicts and missing bindings on direct and fanout exchanges raise `ExchangeError`, a subclass of `RuntimeError`. Examples are a key that is already bound, or a queue that is not bound.

## Commands

Every command accepts `--root-dir DIR`. Without it, the root directory is taken from the `ARATAMQ_DIR` environment variable, or else it is the current directory. The log is written to `<root>/files/aratamq.log`.

- `aratamq` starts the broker process.
  - It truncates the log and logs its start.
  - It then reads standard input until it gets a line containing `q` or `Q`, or until input ends.
  - On the way out it logs its shutdown.
- `aratamq-producer` appends a "Connected" line and a "Shutting down" line to the log, then exits.
- `aratamq-consumer` appends a "Connected" line and a "Shutting down" line to the log, then exits.

## What it does not do

The broker lives only in the memory of the Python process that uses it. There is no network protocol, and no way for separate processes to reach a shared broker. The `aratamq` command does not create or serve a `Broker`. The producer and consumer commands do not publish or receive messages. Queues and bindings are not saved anywhere: `ArataMQConfig.queue_file` names a location, but nothing reads or writes it.