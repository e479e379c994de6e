"""
Name matching components.
"""

from .name_matcher import NameMatcher

__all__ = ['NameMatcher']
