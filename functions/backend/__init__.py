"""
Backend package for the WolfPad AI API.

This package provides a FastAPI application that dispatches named AI
actions to Gemini and returns their JSON results to the web client.
"""
