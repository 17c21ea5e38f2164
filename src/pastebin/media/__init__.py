"""On-disk blob storage."""
