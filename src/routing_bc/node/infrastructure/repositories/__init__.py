from .node_repository import NodeRepository

__all__ = ["NodeRepository"]
