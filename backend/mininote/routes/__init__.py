"""
MiniNote Backend - HTTP Routes Package
=======================================

Route Inventory (registration order matters, first match wins):
    - static.py:  GET  /styles.css, /script.js, ...   (named assets)
                  GET  /js/{file}                      (vendored scripts)
    - uploads.py: POST /upload                         (store an upload)
                  GET  /upload                         (405, POST only)
                  GET  /_tmp/{name}                    (serve an upload)
    - notes.py:   GET  /                               (redirect to a new note)
                  GET  /{slug}                         (editor page or raw text)
                  POST /{slug}                         (save or delete)

    notes.py is registered last because /{slug} matches any path.

Design Principle:
    Routes stay THIN: they read the request, call a service, and pick the
    response type. Size, capacity and path rules live in services.
"""
