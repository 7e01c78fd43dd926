"""Feed ingestion helpers: defensive parsing of raw vehicle payloads."""
