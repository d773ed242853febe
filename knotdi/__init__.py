"""Dependency injection container with singleton, transient and external lifetimes over a bounded memory pool."""

__version__ = "0.1.0"
__all__ = ["container", "descriptor", "factory", "memory_pool"]