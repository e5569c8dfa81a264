"""Adapters connecting the domain ports to HTTP and SQLAlchemy."""
