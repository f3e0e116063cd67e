# droidstrings/config/__init__.py
"""
Configuration for droidstrings.
"""

from .settings import ConverterSettings, get_default_settings_path

__all__ = ['ConverterSettings', 'get_default_settings_path']
