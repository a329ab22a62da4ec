"""Users domain: account projections, role management and bans.

Use Inject(UserServiceProtocol) in FastAPI endpoints.
"""
