"""Pace parsing, rounding and planned-metrics arithmetic."""
