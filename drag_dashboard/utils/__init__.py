"""Shared utilities for drag_dashboard."""
