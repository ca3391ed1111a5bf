# Services package init
"""
MiniNote Backend - Services Layer
==================================

What:  Business logic between the HTTP routes and the note root directory.

Service Inventory:
    - slugs:        slug grammar and random note ids
    - note_store:   NoteStore, one file per note
    - upload_store: UploadStore, timestamped uploads in the same root
    - storage:      atomic temp-file-and-rename writes shared by both stores
    - negotiation:  raw vs rendered output, escaping, excerpts
    - page:         the editor page template
"""
