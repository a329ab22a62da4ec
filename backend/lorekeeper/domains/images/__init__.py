"""Images domain: base64 uploads stored as blobs, served back under the view gate.

Use Inject(ImageServiceProtocol) in FastAPI endpoints.
"""
