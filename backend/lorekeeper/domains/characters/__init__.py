"""Characters domain: the shared resource template plus the expanded view.

Use Inject(CharacterServiceProtocol) in FastAPI endpoints.
"""
