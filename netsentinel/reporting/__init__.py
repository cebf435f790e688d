"""
Reporting module: persistence of run scores and anomalies.
"""

from .sink import ConsoleReporter, FileReporter, Reporter, anomaly_to_row, build_reporters

__all__ = [
    "Reporter",
    "ConsoleReporter",
    "FileReporter",
    "anomaly_to_row",
    "build_reporters",
]
