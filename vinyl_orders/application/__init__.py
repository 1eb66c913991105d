"""Application layer - use case orchestration and DTOs."""
