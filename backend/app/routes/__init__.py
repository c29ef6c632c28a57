# Routes package init
"""
Portfolio Backend — API Routes Package
========================================

Route Inventory:
    - visits.py:       /api/visited, /api/visited/last, /api/visited/location
    - resume.py:       /api/resume-clicks, /api/resume-clicks/increment
    - catalog.py:      /api/certifications[/{title}], /api/projects/...
    - submissions.py:  /api/contact, /api/feedback, /api/query, /api/user-details,
                       /api/user-profiles, /api/authenticate
    - health.py:       /, /health

Routes stay thin: extract input, call a service, set the status code.
Errors propagate to the global handlers in main.py.
"""
