"""
Utilities package for NAS Monitor.

Subprocess helpers, config file resolution and the single-instance lock.
"""
