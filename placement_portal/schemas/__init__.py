"""
Schemas module - Request/Response schemas for API endpoints.

Difference from models:
- Models: ORM tables (what the database stores)
- Schemas: API contract (what client sends/receives)
"""
