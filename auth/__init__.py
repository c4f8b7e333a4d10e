"""
auth — User authentication module.

Provides:
  • JWT creation & verification (PyJWT, HS256)
  • Password hashing (bcrypt, salted)
  • Register / Login / Me API routes
  • ``get_current_user_id`` FastAPI dependency
"""
