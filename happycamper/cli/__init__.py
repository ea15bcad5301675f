"""
Command-line interface for happycamper.
"""
