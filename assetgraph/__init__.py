"""
Asset lineage graph engine.

Builds adjacency indices from parent/child relationship records and answers
reachability, island and path queries over them.
"""

__version__ = "0.1.0"
