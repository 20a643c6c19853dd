"""Application layer: interfaces, DTOs, use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (repos, gateway, job queue, storage).
"""
