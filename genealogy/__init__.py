"""
Genealogy: in-memory mutation ancestry store

Keeps a directed acyclic graph of entities descending from a single stem
entity, with multi-parent descendants and cascading removal of orphaned
lineages.
"""

__version__ = "0.1.0"
__author__ = "Genealogy Project"

from genealogy.core.entity import Entity
from genealogy.core.iterator import ChildrenIterator
from genealogy.core.store import GenealogyStore
from genealogy.config.settings import GenealogySettings
from genealogy.exceptions import (
    GenealogyError,
    NotFound,
    AlreadyExists,
    CannotRemoveStem,
    IdentifierMismatch,
    IteratorInvalidated,
)

__all__ = [
    'Entity',
    'ChildrenIterator',
    'GenealogyStore',
    'GenealogySettings',
    'GenealogyError',
    'NotFound',
    'AlreadyExists',
    'CannotRemoveStem',
    'IdentifierMismatch',
    'IteratorInvalidated',
]
