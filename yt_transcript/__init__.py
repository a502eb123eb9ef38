"""YouTube transcript retrieval and formatting."""
