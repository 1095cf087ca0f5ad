"""Domain types, ports and pure helpers shared across layers.

Nothing in this package performs I/O. Adapters implement the ports defined in
``taskboard.domain.ports`` and the presenter consumes them.
"""
