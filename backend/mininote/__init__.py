"""
MiniNote Backend - Application Package Initializer
===================================================

What: Marks the `mininote` directory as a Python package.
Who:  Used by uvicorn (`--factory mininote.main:create_app`), pytest and the
      `mininote` console script.

Architecture Note:
    The backend follows a layered layout:

    ┌─────────────────────────────────────┐
    │           Routes (HTTP Layer)       │  ← redirects, status codes, headers
    ├─────────────────────────────────────┤
    │      Services (Business Logic)      │  ← slugs, negotiation, quota rules
    ├─────────────────────────────────────┤
    │      Stores (Persistence)           │  ← one file per note, uploads
    └─────────────────────────────────────┘

    The note root directory is the only persistent state. There is no
    database and no in-memory index: the directory listing is authoritative.
"""

__version__ = "1.0.0"
