"""
Domain package - catalog, cart engine, ORM models and request/response schemas.
"""
