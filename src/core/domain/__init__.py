"""Domain models and value objects.

Why here:
- Pure data structures and their invariants live in this package.
- The domain knows nothing about the CLI, files or crypto backends, only about
  character classes, requests and the records collaborators may export.
"""
