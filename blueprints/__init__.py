"""
Blueprints: visual block canvas with a live outline compiler.

Packages:
    core      block catalog, graph store, port interaction, geometry, canvas
    compiler  outline synthesis from a canvas snapshot
    server    FastAPI + Socket.IO service around a single canvas
"""

__version__ = "0.1.0"
