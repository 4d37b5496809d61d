"""Services used by the language and grammar rules."""
