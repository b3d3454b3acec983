from ghent.storage.memory import InMemoryCollection, InMemoryConnection

__all__ = ["InMemoryCollection", "InMemoryConnection"]
