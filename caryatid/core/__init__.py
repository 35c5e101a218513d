"""Caryatid core: version comparison, catalog queries and backend orchestration."""
