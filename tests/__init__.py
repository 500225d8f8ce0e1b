"""Test package for Chat AI.

Structure:
    - unit/: Orchestrator, history, completion client and repository tests
    - integration/: API endpoints and the UI's HTTP store client

Leverages pytest with pytest-check for soft assertions. The completion
service is always faked; no test calls the real Gemini API.
"""
