from .node_model import NodeModel

__all__ = ["NodeModel"]
