"""Recession indicator dashboard."""
