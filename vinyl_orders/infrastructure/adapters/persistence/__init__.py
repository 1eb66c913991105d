"""Persistence adapters."""

from .in_memory_repositories import InMemoryDistributorRepository, InMemoryOrderRepository

__all__ = ["InMemoryDistributorRepository", "InMemoryOrderRepository"]
