"""
Real HTTP integration clients.

These clients communicate with real external systems via HTTP, e.g.:
- the upstream short drama catalog API

Important:
- Must return data shaped according to src/integrations/contracts/*
- Must raise UpstreamFailure (never a raw httpx error) so routes can fall back

Wiring:
The client is constructed from config in src/api/dependencies.py only.
"""
