"""
Contracts (data models).

This folder defines the request/response shapes for the upstream short drama
API and for the theme configuration endpoint.

Why this exists:
- Ensures consistent data structures across the real client and the fallback synthesizer
- Prevents “guessing” payload formats in multiple places

Both the real HTTP client and the fallback handler should use these contracts.
"""
