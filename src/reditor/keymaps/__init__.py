"""Declarative keymap registry and the default Normal/Insert tables."""

from .models import Binding, FallbackResolver, KeyStroke, bind
from .registry import KeymapConflictError, KeymapRegistry, RegistryStats
from .resolver import (
    ActionResolver,
    create_default_resolver,
    default_resolver,
    resolve_insert,
    resolve_normal,
)
from .defaults import (
    DEFAULT_BINDINGS,
    INSERT_BINDINGS,
    NORMAL_BINDINGS,
    insert_text_fallback,
    load_default_keymaps,
    rebind,
)

__all__ = [
    "ActionResolver",
    "Binding",
    "DEFAULT_BINDINGS",
    "FallbackResolver",
    "INSERT_BINDINGS",
    "KeyStroke",
    "KeymapConflictError",
    "KeymapRegistry",
    "NORMAL_BINDINGS",
    "RegistryStats",
    "bind",
    "create_default_resolver",
    "default_resolver",
    "insert_text_fallback",
    "load_default_keymaps",
    "rebind",
    "resolve_insert",
    "resolve_normal",
]
