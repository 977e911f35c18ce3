"""Service layer: fixture commands and the upload collaborator.

Services may import from domain and infrastructure layers.
They must never import from commands or output.
"""
