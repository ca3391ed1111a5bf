# Middleware package init
"""
MiniNote Backend - Middleware Package
======================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [No-Cache] → [GZip] → [CORS] → Route Handler

    1. Request ID: correlation id for every log line of the request
    2. Logging: method, path, status and duration, tagged with the request id
    3. No-Cache: note content must never be served from a browser or proxy
       cache, so every response gets the cache-suppression headers
"""
