"""Business logic layer for files app.

This package contains all business logic for the catalog:
- File upload, listing, download, move, delete
- Flat folder creation and listing
- Orphaned content bookkeeping and storage usage display

Every operation takes the caller's principal explicitly and only ever
touches rows owned by it. Storage access goes through
``filebox.apps.files.infrastructure.object_store``.
"""
