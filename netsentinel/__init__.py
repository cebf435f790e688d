"""
NetSentinel: clustering-based anomaly detection for network traffic records.
"""

__version__ = "0.1.0"
