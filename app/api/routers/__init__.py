"""
API Routers Module

This module contains all FastAPI routers for the application.
Each router handles a specific domain of the API.

Available routers:
- auth: Session issuance and inspection
- jobs: Text-to-speech job endpoints
- catalog: Voices, pricing plans, conversion history
- billing: Top-up orders and transactions
- admin: Admin-only management endpoints
"""

__all__ = ["auth", "jobs", "catalog", "billing", "admin"]
