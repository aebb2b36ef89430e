"""
Presenter implementations.

Each module registers its presenter with ``tap_tempo.core.registry`` on import.
"""
