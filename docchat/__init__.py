"""DocChat - web chat over a hosted LLM with document attachments.

Combines FastAPI for HTTP streaming, Agno for model orchestration,
NiceGUI for the browser interface, and Pydantic for data validation.

Components:
    - api: HTTP endpoints and SSE responses
    - relay: prompt forwarding to the workflow webhook or the model
    - agent: LLM client configuration and streaming
    - parsing: PDF and Word text extraction
    - storage: uploaded file persistence
    - auth: in-memory user store
    - ui: Web interface for chat interactions
    - models: Request/response schemas
"""

__version__ = "0.1.0"
