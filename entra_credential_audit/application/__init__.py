"""Application layer - Use cases, ports and orchestration."""
