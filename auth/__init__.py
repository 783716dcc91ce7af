"""
auth — User authentication module.

Provides:
  • Signed, time-limited bearer tokens (``TokenSigner``)
  • Password hashing (bcrypt, moderate work factor)
  • Register / Login API routes
  • ``get_current_identity`` FastAPI dependency (the auth gate)
"""
