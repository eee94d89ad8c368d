"""pkgshare - version download share and golden version finder."""

__version__ = "0.1.0"
