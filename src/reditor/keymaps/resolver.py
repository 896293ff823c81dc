"""Per-mode key resolution with telemetry instrumentation."""

from __future__ import annotations

from typing import Dict, Optional

from reditor.actions.models import Action
from reditor.modes import KeyInput, Mode, key_to_token
from reditor.runtime.telemetry import span

from .defaults import load_default_keymaps
from .models import Binding
from .registry import KeymapRegistry


class ActionResolver:
    """Turns a raw key into an ``Action`` using the table of the given mode.

    Resolution never looks at editor state: the same ``(mode, key)`` always
    yields the same action.
    """

    def __init__(
        self, registry: KeymapRegistry, *, logger_name: str | None = None
    ) -> None:
        self._registry = registry
        self._logger_name = logger_name
        self._cache: Dict[Mode, tuple[int, Dict[str, Binding]]] = {}

    @property
    def registry(self) -> KeymapRegistry:
        return self._registry

    def resolve(self, mode: Mode, key: KeyInput) -> Optional[Action]:
        token = key_to_token(key)
        with span(
            "keymaps::resolve",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"mode": mode.value, "token": token},
        ) as handle:
            binding = self._table(mode).get(token)
            if binding is not None:
                handle.add_metadata("status", "match")
                handle.add_metadata("binding_id", binding.id)
                return binding.action

            fallback = self._registry.get_fallback(mode)
            if fallback is not None:
                action = fallback(key)
                if action is not None:
                    handle.add_metadata("status", "fallback")
                    return action

            handle.add_metadata("status", "miss")
            return None

    def _table(self, mode: Mode) -> Dict[str, Binding]:
        revision = self._registry.revision()
        cached = self._cache.get(mode)
        if cached and cached[0] == revision:
            return cached[1]

        table = {
            binding.key_signature: binding
            for binding in self._registry.iter_bindings(mode)
        }
        self._cache[mode] = (revision, table)
        return table


def create_default_resolver() -> ActionResolver:
    """Build a resolver over a fresh registry seeded with the default tables."""

    registry = KeymapRegistry(logger_name="reditor.keymaps")
    load_default_keymaps(registry)
    return ActionResolver(registry, logger_name="reditor.keymaps")


_DEFAULT_RESOLVER: Optional[ActionResolver] = None


def default_resolver() -> ActionResolver:
    """Return a shared resolver over the built-in tables."""

    global _DEFAULT_RESOLVER
    if _DEFAULT_RESOLVER is None:
        _DEFAULT_RESOLVER = create_default_resolver()
    return _DEFAULT_RESOLVER


def resolve_normal(key: KeyInput) -> Optional[Action]:
    """Normal-mode table: motions, mode entry, line opening, ``D`` and ``q``."""

    return default_resolver().resolve(Mode.NORMAL, key)


def resolve_insert(key: KeyInput) -> Optional[Action]:
    """Insert-mode table: leave, newline, backspace, and literal text."""

    return default_resolver().resolve(Mode.INSERT, key)


__all__ = [
    "ActionResolver",
    "create_default_resolver",
    "default_resolver",
    "resolve_insert",
    "resolve_normal",
]
