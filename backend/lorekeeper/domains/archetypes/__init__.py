"""Archetypes domain. Use Inject(ArchetypeServiceProtocol) in FastAPI endpoints."""
