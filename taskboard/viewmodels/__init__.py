"""ViewModel package for UI state and display projections.

Call context:
    ``taskboard/app/main.py`` and the tkinter views import concrete
    viewmodels from this package.

Dependencies:
    Modules in this package depend on domain types only. I/O adapters and
    orchestration remain outside.
"""
