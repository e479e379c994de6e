"""
Tests for the rwanda_locations package.
"""
