# Middleware package init
"""
Portfolio Backend — Middleware Package
========================================

Middleware Chain (request direction):
    Request → [Rate Limit] → [Request ID] → [Logging] → [Security Headers]
            → [Sanitize Body] → [GZip] → [CORS] → Route Handler

    1. Rate Limit first: reject floods before any other work
    2. Request ID: correlation ID for log lines and error bodies
    3. Logging: one access line per request, with the request ID
    4. Security Headers: nosniff / frame-deny on every response
    5. Sanitize Body: strip markup from JSON bodies before handlers see them
"""
