"""Data models for Cloud Canvas."""

from .graph import Edge, Graph, Node, load_graph

__all__ = ["Edge", "Graph", "Node", "load_graph"]
