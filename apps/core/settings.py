"""
Core App Settings

This file contains settings specific to the core app.
"""

# Login/Logout URLs for DRF browsable API
LOGIN_URL = "/api-auth/login/"
LOGOUT_URL = "/api-auth/logout/"

HEALTH_CHECK_DATABASES = ["default"]
"""Database aliases probed by the /health/ endpoint."""
