"""Task list desktop client built around a presenter, ports and adapters."""
