"""Hosted model clients (Gemini text/vision, speech synthesis)"""
