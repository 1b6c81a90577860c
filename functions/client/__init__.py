"""
Client-side proxy for the AI action API.

Used by Python callers (scripts, other services, tests) the same way the
web client calls `POST /api/ai`.
"""
