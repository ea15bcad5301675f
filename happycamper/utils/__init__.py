"""
Shared helpers for happycamper.
"""
