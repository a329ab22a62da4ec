"""Skills domain. Use Inject(SkillServiceProtocol) in FastAPI endpoints."""
