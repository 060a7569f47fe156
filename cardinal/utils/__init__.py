"""Shared helpers for validation, redaction and error sanitization"""
