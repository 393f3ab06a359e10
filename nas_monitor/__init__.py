"""Power-aware NAS mount daemon for laptops."""

__version__ = "0.1.0"
