"""AI recruitment pipeline webhook service."""
