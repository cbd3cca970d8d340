"""
Chat backend for an IT support agent.

Conversations live in an in-memory store, user messages are forwarded to a
generative-AI backend through the 'AIGateway', and the reply is appended back
to the conversation by 'SupportChatController'. 'server.create_app' wires the
pieces into a FastAPI application.
"""

__version__ = "0.1.0"
