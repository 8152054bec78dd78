"""Framework integrations for query-filter."""
