"""Package registry adapters."""

from pkgshare.adapters.base import BaseAdapter, PackageNotFoundError
from pkgshare.adapters.npm import NpmAdapter

__all__ = ["BaseAdapter", "NpmAdapter", "PackageNotFoundError"]
