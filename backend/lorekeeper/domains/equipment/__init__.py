"""Equipment domain: per-character slot assignments gated on the owning character.

Use Inject(EquipmentServiceProtocol) in FastAPI endpoints.
"""
