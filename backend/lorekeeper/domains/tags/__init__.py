"""Tags domain. Use Inject(TagServiceProtocol) in FastAPI endpoints."""
