"""
Psycho Mantis Engine.

Resilient async client for the Steam Web API and Store API,
normalizing upstream payloads into stable records.
"""

__version__ = "0.1.0"

__all__ = [
    "__version__",
]
