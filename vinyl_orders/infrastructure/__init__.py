"""Infrastructure layer - adapters for persistence, events and notifications."""
