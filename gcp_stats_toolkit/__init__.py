"""
GCP Stats Toolkit Package

Placement discovery for processes running on or off Google Cloud, and a
batch job that copies Cloud Spanner query statistics into BigQuery.
"""

__version__ = "1.0.0"
__author__ = "Metrics Pipeline Team"
