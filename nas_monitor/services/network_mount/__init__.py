"""
Network Mount Module

Components:
- NetworkMountService: Mount provider facade used by the reconciler
- BaseMounter: Abstract base class for platform operations
- GioMounter: Linux (gvfs) implementation
- MacOSMounter: macOS implementation
- PlatformFactory: Platform detection and factory
- ReachabilityChecker: Cheap host check before a mount attempt
"""

from .base_mounter import BaseMounter
from .mount_service import NetworkMountService
from .platform_factory import PlatformFactory
from .reachability import ReachabilityChecker

__all__ = [
    "NetworkMountService",
    "BaseMounter",
    "PlatformFactory",
    "ReachabilityChecker",
]
