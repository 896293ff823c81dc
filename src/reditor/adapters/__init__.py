"""Host adapters that embed the editor in a UI toolkit."""
