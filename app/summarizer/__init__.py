"""
PDF Summarizer Backend Application.

A FastAPI microservice that downloads a PDF from a URL, extracts its text
and asks an OpenAI model for a structured summary (gist, key points,
relevance).
"""

__version__ = "1.0.0"
