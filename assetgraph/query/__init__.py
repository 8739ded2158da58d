"""
Query layer over the graph engine.
"""

from .graph_query import GraphQueryService, ALL_TYPES

__all__ = [
    'GraphQueryService',
    'ALL_TYPES'
]
