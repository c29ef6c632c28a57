# Services package init
"""
Portfolio Backend — Services Layer
====================================

Service Inventory:
    - geo:                haversine distance and coordinate parsing
    - identity:           network address, device fingerprint, client identity
    - visit_service:      location deduplication and visit history
    - resume_counter:     process-wide resume click counter
    - catalog_service:    certifications and projects (read-only)
    - submission_service: contact/feedback/query forms and user profiles
    - auth_service:       admin password check

Services never touch HTTP objects except identity, whose whole job is to
read the request.
"""
