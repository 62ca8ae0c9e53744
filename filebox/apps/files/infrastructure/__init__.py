"""Infrastructure layer for files app.

This package contains integrations with external systems:
- Storage backends (local filesystem or S3-compatible)
- The object store that places, opens and removes content
- Metadata helpers (accepted types, display names, storage handles)

Keep infrastructure concerns separate from business logic.
"""
