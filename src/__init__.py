"""Chat AI - ask a generative-language model and keep every answer.

Combines FastAPI for the HTTP API, SQLModel for persistence, httpx for the
Gemini client, NiceGUI for the interface, and Pydantic for data validation.

Components:
    - api: HTTP endpoints over stored messages and chat turns
    - chat: Turn orchestration, history service, shared chat state
    - completion: Gemini generateContent client
    - store: SQLModel-backed message repository
    - ui: Chat and history views
    - models: Request/response schemas
"""

__version__ = "0.1.0"
