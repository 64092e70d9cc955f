# Routes package init
"""
Endpoint Registry — API Routes Package
========================================

Route Inventory:
    - endpoints.py:  GET    /endpoints         (list, newest first)
                     POST   /endpoints         (create)
                     GET    /endpoints/{id}    (read one)
                     PUT    /endpoints/{id}    (replace)
                     DELETE /endpoints/{id}    (delete)
    - health.py:     GET    /health            (service health check)

Routes are THIN: they parse the request, call EndpointService, and let the
global exception handlers format errors.
"""
