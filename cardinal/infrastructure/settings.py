"""
Application-wide settings and environment configuration
"""

from __future__ import annotations

import os

from dotenv import find_dotenv, load_dotenv

# .env in the working directory (or a parent) fills in anything the
# process environment leaves unset
load_dotenv(find_dotenv(usecwd=True))

# Environment
ENV = os.getenv("CARDINAL_ENV", "development")

# API Configuration (PORT is what the hosting platform injects)
API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("PORT", os.getenv("API_PORT", "10000")))
LOG_LEVEL = os.getenv("CARDINAL_LOG_LEVEL", "INFO")

# Google Cloud / Gemini
GOOGLE_CLOUD_PROJECT = os.getenv("GOOGLE_CLOUD_PROJECT")
GOOGLE_API_KEY = os.getenv("GOOGLE_API_KEY")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.0-flash-001")
GEMINI_LOCATION = os.getenv("GEMINI_LOCATION", "us-central1")
GEMINI_MAX_TOKENS = int(os.getenv("GEMINI_MAX_TOKENS", "1024"))
GEMINI_TEMPERATURE = float(os.getenv("GEMINI_TEMPERATURE", "0.7"))

# OpenAI (speech synthesis only)
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
TTS_MODEL = os.getenv("CARDINAL_TTS_MODEL", "tts-1")
TTS_VOICE = os.getenv("CARDINAL_TTS_VOICE", "alloy")
TTS_VOICES = ("alloy", "echo", "fable", "onyx", "nova", "shimmer")

# CORS - comma-separated allowed origins; unset means any origin
CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CARDINAL_CORS_ORIGINS", "").split(",")
    if origin.strip()
]


def is_development() -> bool:
    """Check if running in development"""
    return ENV == "development"
