"""Business logic for result acquisition, polling and analysis."""
