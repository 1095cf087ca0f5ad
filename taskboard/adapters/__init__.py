"""Concrete implementations of the task ports (file, REST, memory)."""
