"""Items domain. Use Inject(ItemServiceProtocol) in FastAPI endpoints."""
