"""
Tracking module for the ROI tracking engine.
Provides frame-to-frame association and the authoritative track store.
"""

from .track import Track, IdAllocator, DEFAULT_ALLOCATOR, color_for_id, PALETTE
from .association import (
    MatchResult,
    GreedyCentroidAssociator,
    HungarianCentroidAssociator,
    gated_distances,
)
from .store import TrackStore


def build_associator(config):
    """
    Build an associator based on configuration.
    
    Args:
        config: Either a string (associator name) or dict with 'name' and params
        
    Returns:
        Associator instance
    """
    if isinstance(config, str):
        name = config.lower()
        params = {}
    else:
        name = config.get('name', 'greedy').lower()
        params = {k: v for k, v in config.items() if k != 'name'}
    
    if name in ('greedy', 'centroid'):
        return GreedyCentroidAssociator(**params)
    elif name in ('hungarian', 'optimal'):
        return HungarianCentroidAssociator(**params)
    else:
        raise ValueError(f'Unknown associator: {name}')


__all__ = [
    'Track',
    'IdAllocator',
    'DEFAULT_ALLOCATOR',
    'color_for_id',
    'PALETTE',
    'MatchResult',
    'GreedyCentroidAssociator',
    'HungarianCentroidAssociator',
    'gated_distances',
    'TrackStore',
    'build_associator',
]
