# Routes package init
"""
Blade Stock Backend — API Routes Package
==========================================

Route Inventory:
    - health.py:     GET  /                        (service banner)
                     GET  /health                  (liveness)
    - data.py:       GET  /api/data                (aggregate read)
                     POST /api/reset               (clear everything)
    - inventory.py:  POST /api/inventory
    - logs.py:       POST /api/logs
                     DELETE /api/logs/{id}
    - machines.py:   POST /api/machine-blades
                     POST /api/blade-assignments
                     POST /api/machine-status

Every mutating route carries Depends(require_stock_password). Handlers stay
thin: take the body, call a service, return its schema.
"""
