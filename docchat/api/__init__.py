"""FastAPI endpoints for DocChat.

Endpoints:
    - GET /health: Service health status
    - POST /api/chat/send: Prompt relay streamed as Server-Sent Events
    - POST /api/chat/upload: PDF/Word upload with text extraction
    - POST /api/auth/login: Credential check
    - POST /api/auth/register: User creation
"""

from docchat.api.app import app, create_app

__all__ = ["app", "create_app"]
