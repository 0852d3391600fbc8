"""
API Routers - Organized endpoint handlers for the Bondgraph API.

Each router handles a specific domain:
- social_graph: Graph, statistics and per-person connections
- people: Profile CRUD
- bonds: Bond CRUD and clean-up actions
"""
