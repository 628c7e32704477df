"""
Core data structures for the genealogy store.

This module implements the entity arena, its adjacency storage, the
children iterator and the cascading removal used by GenealogyStore.
"""

from genealogy.core.entity import Entity, EntityRecord, Identified
from genealogy.core.adjacency import AdjacencySet
from genealogy.core.iterator import ChildrenIterator
from genealogy.core.removal import RemovalPlan
from genealogy.core.store import GenealogyStore

__all__ = [
    'Entity',
    'EntityRecord',
    'Identified',
    'AdjacencySet',
    'ChildrenIterator',
    'RemovalPlan',
    'GenealogyStore',
]
