"""Knowledge graph subsystem.

This module provides:
- The entity catalog (categories, styling, natural keys)
- A graph store abstraction + Neo4j implementation
- Graph assembly for the student, overview and career views
- Read-only lookups, student profiles and reference-data seeding
"""

from .assembler import GraphAssembler
from .catalog import EntityCategory
from .models import GraphEdge, GraphNode, KnowledgeGraph, RelationTriple
from .store import GraphStore

__all__ = [
    "EntityCategory",
    "GraphAssembler",
    "GraphEdge",
    "GraphNode",
    "GraphStore",
    "KnowledgeGraph",
    "RelationTriple",
]
