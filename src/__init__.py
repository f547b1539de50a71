"""
Delivery Analytics Platform

Read-only analytics over delivery and zone records:
- Delivery metrics, hourly trends and status timelines
- Zone performance snapshots with courier efficiency scoring
- FastAPI service backed by the BigQuery curated dataset
"""

__version__ = "1.0.0"
