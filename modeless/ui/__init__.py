"""PyQt5 user interface (optional ``gui`` extra)."""
