"""
auth — User authentication module.

Provides:
  • JWT creation & verification (python-jose, HS256)
  • Password hashing (bcrypt)
  • Register / Login API routes
  • ``get_current_user`` FastAPI dependency
"""
