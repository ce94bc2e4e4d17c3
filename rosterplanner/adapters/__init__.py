"""
Adapters layer - where stored day records come from.
"""

from .yaml_day_source import YamlDaySource

__all__ = ["YamlDaySource"]
