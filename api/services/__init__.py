"""
API Services - Business logic shared by the Bondgraph API routers.
"""

from .graph_service import count_link_categories, graph_links, load_graph_data

__all__ = ["count_link_categories", "graph_links", "load_graph_data"]
