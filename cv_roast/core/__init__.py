"""Core domain logic: extraction, critique generation and fallback content."""
