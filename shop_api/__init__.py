"""Shop API: registration, JWT auth, self-service profile and admin user management."""

__version__ = "1.0.0"
