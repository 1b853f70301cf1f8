"""Document critique service: extraction, critique generation and session correlation."""
