"""Unit tests for individual components in isolation.

Coverage:
    - models/: Pydantic validation and SSE framing
    - parsing/: PDF and Word text extraction
    - relay/: chunking, webhook client, event sequencing
    - agent/: configuration and model wiring
    - ui/: client-side chat state and API client
"""
