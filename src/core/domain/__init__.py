"""Domain models, status vocabularies and errors.

Why:
- Pure, strict data structures (Pydantic v2) and the typed errors the
  services raise.
- The domain knows nothing about HTTP, the CLI or any SDK.
"""
