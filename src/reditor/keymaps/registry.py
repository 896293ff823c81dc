"""Keymap registry holding one resolution table per mode."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, Iterator, Optional

from reditor.errors import EditorError
from reditor.modes import Mode
from reditor.runtime.telemetry import span

from .models import Binding, FallbackResolver


@dataclass(slots=True)
class RegistryStats:
    """Lightweight snapshot describing registry state."""

    binding_count: int
    modes: tuple[str, ...]
    fallbacks: tuple[str, ...]


class KeymapConflictError(EditorError):
    """Raised when a new binding claims a key already bound in its mode."""

    def __init__(self, binding: Binding, existing: Binding):
        super().__init__(
            f"Binding '{binding.id}' conflicts with '{existing.id}' "
            f"on {binding.key_signature!r} in {binding.mode.value} mode"
        )
        self.binding = binding
        self.existing = existing


class KeymapRegistry:
    """Owns bindings, indexed by mode and key signature."""

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._bindings: Dict[str, Binding] = {}
        self._mode_index: Dict[Mode, Dict[str, str]] = {}
        self._fallbacks: Dict[Mode, FallbackResolver] = {}
        self._logger_name = logger_name
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    def get_binding(self, binding_id: str) -> Binding:
        try:
            return self._bindings[binding_id]
        except KeyError as exc:
            raise KeyError(f"Binding '{binding_id}' is not registered") from exc

    def lookup(self, mode: Mode, token: str) -> Optional[Binding]:
        binding_id = self._mode_index.get(mode, {}).get(token)
        if binding_id is None:
            return None
        return self._bindings[binding_id]

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        with span(
            "keymaps::register_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id, "mode": binding.mode.value},
        ) as handle:
            existing = self.lookup(binding.mode, binding.key_signature)
            if existing is not None and existing.id != binding.id and not replace:
                handle.add_metadata("conflict", existing.id)
                raise KeymapConflictError(binding, existing)

            if binding.id in self._bindings:
                if not replace:
                    raise ValueError(f"Binding id '{binding.id}' already registered")
                self._remove_binding(self._bindings.pop(binding.id))
            if existing is not None and existing.id != binding.id:
                self._remove_binding(self._bindings.pop(existing.id))

            self._bindings[binding.id] = binding
            self._index_binding(binding)
            self._touch_bindings()
            return binding

    def unregister_binding(self, binding_id: str) -> Optional[Binding]:
        with span(
            "keymaps::unregister_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding_id},
        ):
            binding = self._bindings.pop(binding_id, None)
            if not binding:
                return None
            self._remove_binding(binding)
            self._touch_bindings()
            return binding

    def update_binding(self, binding_id: str, **changes: object) -> Binding:
        with span(
            "keymaps::update_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding_id},
        ) as handle:
            if binding_id not in self._bindings:
                handle.fail("missing_binding")
                raise KeyError(f"Binding '{binding_id}' not found")

            current = self._bindings[binding_id]
            updated = replace(current, **changes)
            existing = self.lookup(updated.mode, updated.key_signature)
            if existing is not None and existing.id != binding_id:
                handle.add_metadata("conflict", existing.id)
                raise KeymapConflictError(updated, existing)

            self._remove_binding(current)
            self._bindings[binding_id] = updated
            self._index_binding(updated)
            self._touch_bindings()
            return updated

    def iter_bindings(self, mode: Optional[Mode] = None) -> Iterator[Binding]:
        if mode is None:
            yield from self._bindings.values()
            return
        for binding_id in self._mode_index.get(mode, {}).values():
            yield self._bindings[binding_id]

    def set_fallback(self, mode: Mode, resolver: Optional[FallbackResolver]) -> None:
        """Install the resolver consulted when no binding matches in ``mode``."""

        if resolver is None:
            self._fallbacks.pop(mode, None)
        else:
            self._fallbacks[mode] = resolver
        self._touch_bindings()

    def get_fallback(self, mode: Mode) -> Optional[FallbackResolver]:
        return self._fallbacks.get(mode)

    def stats(self) -> RegistryStats:
        return RegistryStats(
            binding_count=len(self._bindings),
            modes=tuple(sorted(mode.value for mode in self._mode_index)),
            fallbacks=tuple(sorted(mode.value for mode in self._fallbacks)),
        )

    def _index_binding(self, binding: Binding) -> None:
        by_signature = self._mode_index.setdefault(binding.mode, {})
        by_signature[binding.key_signature] = binding.id

    def _remove_binding(self, binding: Binding) -> None:
        mode_bucket = self._mode_index.get(binding.mode)
        if not mode_bucket:
            return
        if mode_bucket.get(binding.key_signature) == binding.id:
            mode_bucket.pop(binding.key_signature)
        if not mode_bucket:
            self._mode_index.pop(binding.mode, None)

    def _touch_bindings(self) -> None:
        self._revision += 1


__all__ = [
    "KeymapRegistry",
    "KeymapConflictError",
    "RegistryStats",
]
