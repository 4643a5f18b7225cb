"""Dataset ingestion layer.

This module reads the scraped snapshot and transition datasets and parses
their composite keys into typed records for the transforms layer.
"""
