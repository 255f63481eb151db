"""Integration tests for the API working as a system.

Requests go through the real FastAPI app with httpx ASGITransport. Only the
outbound webhook is mocked, via httpx.MockTransport.
"""
