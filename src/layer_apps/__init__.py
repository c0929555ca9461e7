"""
Layer demo applications.

Provides:
- A gateway client for the Layer AI-routing service (chat and image generation)
- FastAPI apps for the chatbot, content, image and recipe demos
- CLI helpers to serve an app or run a single generation
"""
