"""An in-process message broker with direct, fanout and topic exchanges."""

__version__ = "0.1.0"