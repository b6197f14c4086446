"""Notes & password vault.

A small single-user console tool that keeps credential entries and free-text
notes in memory and persists them to one local JSON file between runs.
Modules do not touch the filesystem or the console on import.
"""

__all__ = [
    "__version__",
]

__version__ = "0.1.0"
