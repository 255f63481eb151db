"""NiceGUI interface - thin visualization layer for chat interactions.

Responsibilities:
    - Login and registration forms
    - Chat message display with streaming support
    - Session list with new/select/delete
    - Document upload for the active session
    - Dark/light theme toggle

Conversation state lives in ChatState (per page); all work is delegated
to the API over HTTP.
"""
