"""Core interfaces.

Why:
- Defines the contracts (Protocol) that concrete adapters implement.
- The services depend on abstractions, not on httpx.
"""
