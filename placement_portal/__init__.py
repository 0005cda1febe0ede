"""
Campus Placement Portal
Organizations post job offers, students apply, admins and organizations
decide on applications.

Architecture:
- SQLAlchemy ORM over a relational store (PostgreSQL)
- FastAPI routes -> guard -> services -> models
"""

__version__ = "1.0.0"
