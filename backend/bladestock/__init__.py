"""
Blade Stock Backend — Application Package
===========================================

What: Backend for tracking welding-blade stock, machine-to-blade assignments,
      machine status and the stock movement log across groups of machines.
Who:  Served by uvicorn (`uvicorn bladestock.main:app`), driven by Alembic and pytest.

Layers:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns, password gate
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← upserts, reset, aggregate read
    ├─────────────────────────────────────┤
    │   Transformers / Schemas / Models   │  ← row reshaping, API contract, ORM
    ├─────────────────────────────────────┤
    │        Database (Persistence)       │  ← Async SQLAlchemy sessions
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
