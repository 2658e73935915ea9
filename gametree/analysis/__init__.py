"""
Analysis tools for gametree.

Provides:
- Exhaustive ground-truth game values
- Reachable state enumeration
- Belief-state size statistics
"""

from .tree import (
    solve,
    action_values,
    reachable_states,
    BeliefStatistics,
    belief_statistics,
)

__all__ = [
    "solve",
    "action_values",
    "reachable_states",
    "BeliefStatistics",
    "belief_statistics",
]
