# Services package init
"""
Blade Stock Backend — Services Layer
======================================

What:  Business logic between routes (HTTP) and the database.
How:   Stateless service singletons. Each call receives its AsyncSession (or
       session factory) from the route, talks to storage through the helpers
       in storage.py, and returns response schemas.

Service Inventory:
    - storage.py:            dialect-aware upsert, storage error translation
    - inventory_service.py:  inventory upsert
    - log_service.py:        log append and delete
    - machine_service.py:    machine blade / assignment / status upserts
    - data_service.py:       aggregate read (GET /api/data) and reset
"""
