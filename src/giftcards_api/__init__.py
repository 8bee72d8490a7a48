"""Gift-card rewards API."""
