"""NiceGUI interface - thin visualization layer for chat interactions.

Responsibilities:
    - Chat view with the per-page transcript
    - History view with single delete and clear-all
    - One ChatState shared by both views

Store access goes through the chat REST API (ChatApiClient).
"""
