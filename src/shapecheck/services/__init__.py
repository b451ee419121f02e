"""Service layer — operations returning ServiceResult, plus the guard adapter.

Services may import from domain and config layers.
They must never import from commands or output.
"""
