"""
Exercise Tracker — API Routes Package
=======================================

Route Inventory:
    - index.py:   GET  /                               (landing page)
    - users.py:   GET  /api/users                      (list users)
                  POST /api/users                      (create user)
                  POST /api/users/{_id}/exercises      (add exercise)
                  GET  /api/users/{_id}/logs           (exercise log)
    - health.py:  GET  /health                         (database health)

Routes stay thin: extract request values, call a service, return its
response model. Business rules live in services.
"""
