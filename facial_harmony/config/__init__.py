"""Configuration components"""

from .settings import MethodologyConfig, load_methodology

__all__ = ['MethodologyConfig', 'load_methodology']
