"""
Configuration management for datalink.
"""

from .config_loader import ConnectorSettings

__all__ = ["ConnectorSettings"]
