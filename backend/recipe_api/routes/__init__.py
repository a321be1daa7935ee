# Routes package init
"""
Recipe API — API Routes Package
=================================

What:  HTTP route handlers that accept requests and return responses.
How:   Each route module handles one resource.

Route Inventory:
    - users.py:       POST /api/users/register   (create account)
                      POST /api/users/login      (check credentials)
                      GET  /api/users/{id}       (profile)
    - recipes.py:     GET  /api/recipes          (filtered list)
                      GET  /api/recipes/{id}     (full recipe)
    - categories.py:  GET  /api/categories       (all categories)
                      GET  /api/categories/{id}  (single category)
    - health.py:      GET  /health               (service health check)

Routes stay thin: extract request data, call a service, set status code
and headers. Business rules live in the services.
"""
