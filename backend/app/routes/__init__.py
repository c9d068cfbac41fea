# Routes package init
"""
Todo Backend: API Routes Package
==================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - todos.py:   /api/todos/...   (todo CRUD, search, categories)
    - health.py:  GET /health      (service health check)

Routes stay thin: extract request data, call the service, pick the status
code. Database work lives in app.services.
"""
