"""hostcap — capability detection and dispatch for target hosts."""

__version__ = "0.1.0"
