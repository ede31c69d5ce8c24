"""Pydantic models for payloads and pipeline state."""
