"""Multi-platform publishing status dashboard."""
