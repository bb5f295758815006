"""
Output sinks for tick results.
"""

from .sink import TracksWriter

__all__ = ['TracksWriter']
