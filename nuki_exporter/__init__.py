"""
Nuki Exporter - Prometheus exporter for the Nuki bridge HTTP API
"""

__version__ = "1.0.0"
