"""
ProductMgmt OS
Application package initialization
"""

from pmos.config import settings, get_settings, Settings

__all__ = ["settings", "get_settings", "Settings"]
