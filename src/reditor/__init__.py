"""Modal terminal text editor core with a Textual host."""

__all__ = [
    "actions",
    "adapters",
    "buffer",
    "config",
    "editor",
    "errors",
    "keymaps",
    "modes",
    "runtime",
]

__version__ = "0.1.0"
