"""Built-in strategies and lookup by name.

``discover_strategies`` scans this package for ``Strategy`` subclasses, so a
new variant only needs a module here; ``make_strategy`` builds the one a
session driver asked for.
"""

from __future__ import annotations

import importlib
import pkgutil
import random
from pathlib import Path

from strategy import SolverConfig, Strategy

from .adaptive_strat import AdaptiveStrategy, Tier, select_minimax_first
from .entropy_strat import EntropyStrategy
from .hybrid_strat import HybridStrategy
from .minimax_strat import MinimaxStrategy
from .random_strat import RandomStrategy

_PKG_DIR = Path(__file__).resolve().parent


def _subclasses_in_module(mod) -> list[type[Strategy]]:
    found: list[type[Strategy]] = []
    for attr_name in dir(mod):
        obj = getattr(mod, attr_name)
        if (
            isinstance(obj, type)
            and issubclass(obj, Strategy)
            and obj.__module__ == mod.__name__
        ):
            found.append(obj)
    return found


def discover_strategies() -> list[type[Strategy]]:
    """Return every Strategy subclass defined in this package."""
    found: list[type[Strategy]] = []
    for info in pkgutil.iter_modules([str(_PKG_DIR)]):
        mod = importlib.import_module(f"{__name__}.{info.name}")
        found.extend(_subclasses_in_module(mod))
    return found


# "EntropyStrategy" -> "entropy"; "pure-entropy" names the same class.
_BY_NAME: dict[str, type[Strategy]] = {
    cls.__name__.removesuffix("Strategy").lower(): cls for cls in discover_strategies()
}
_BY_NAME["pure-entropy"] = EntropyStrategy


def available_strategies() -> list[str]:
    return sorted(_BY_NAME)


def make_strategy(
    name: str | None = None,
    config: SolverConfig | None = None,
    rng: random.Random | None = None,
) -> Strategy:
    """Build the strategy called *name* (default: ``config.strategy``)."""
    config = config or SolverConfig()
    key = (name or config.strategy).lower()
    try:
        cls = _BY_NAME[key]
    except KeyError:
        raise ValueError(
            f"unknown strategy {key!r}; available: {', '.join(available_strategies())}"
        ) from None
    if cls in (AdaptiveStrategy, RandomStrategy):
        return cls(config, rng=rng)
    return cls(config)


__all__ = [
    "AdaptiveStrategy",
    "EntropyStrategy",
    "HybridStrategy",
    "MinimaxStrategy",
    "RandomStrategy",
    "Tier",
    "available_strategies",
    "discover_strategies",
    "make_strategy",
    "select_minimax_first",
]
