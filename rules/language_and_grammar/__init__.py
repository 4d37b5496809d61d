"""Language and grammar rules."""
