"""Test package for DocChat.

Structure:
    - unit/: Individual function and class tests
    - integration/: API workflows through the ASGI app

External services (model provider, workflow webhook) are replaced with
httpx mock transports or fake services; no network access is needed.
Leverages pytest with pytest-check for soft assertions.
"""
