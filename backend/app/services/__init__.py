# Services package init
"""
Todo Backend: Services Layer
==============================

What:  The handler layer between routes (HTTP) and the database.
How:   Services take an AsyncSession plus validated inputs, run one SQL
       statement, and return plain results or raise app exceptions.

Service Inventory:
    - TodoService: create / list / update / delete / search / categories
"""
