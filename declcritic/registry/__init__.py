"""Package registry adapters."""

from .base import PackageInfo, Registry
from .cache import RegistryCache
from .npm import NpmRegistry, find_entry_point

__all__ = ["NpmRegistry", "PackageInfo", "Registry", "RegistryCache", "find_entry_point"]
