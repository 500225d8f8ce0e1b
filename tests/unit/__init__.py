"""Unit tests for individual components in isolation.

Coverage:
    - chat/: Turn orchestration, history service, chat state
    - completion/: Config validation and request/response handling
    - store/: Repository operations on a temporary SQLite file

Uses protocol-conforming fakes from conftest and httpx.MockTransport.
"""
