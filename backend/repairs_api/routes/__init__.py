# Routes package init
"""
Repairs API — API Routes Package
=================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - repairs.py:  GET/POST /repairs, GET/PATCH/DELETE /repairs/{id},
                   legacy PATCH/DELETE /repairs (id in body)
    - plugin.py:   GET /.well-known/ai-plugin.json, GET / (redirect to docs)
    - health.py:   GET /health

Routes are thin: they pull values out of the request, call RepairService with
the app's store, and set status codes and headers. Filtering and merge rules
live in services/repair_service.py.
"""
