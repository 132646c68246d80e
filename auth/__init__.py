"""
auth — User authentication module.

Provides:
  • JWT token creation & verification (``TokenIssuer``)
  • Password hashing (bcrypt)
  • Register / Login API routes
  • ``require_user`` FastAPI dependency (the authorization gate)
"""
