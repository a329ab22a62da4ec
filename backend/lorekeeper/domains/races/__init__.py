"""Races domain. Use Inject(RaceServiceProtocol) in FastAPI endpoints."""
