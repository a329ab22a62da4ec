"""Perks domain. Use Inject(PerkServiceProtocol) in FastAPI endpoints."""
