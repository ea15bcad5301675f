"""
Structured logging, metrics and the per-run warning log.
"""
