"""Batch caller for the match engine."""
