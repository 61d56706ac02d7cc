"""Self-play harness for exercising the engine with simple bots."""

from .bots import baseline_strategy, passive_strategy

__all__ = ["baseline_strategy", "passive_strategy"]
