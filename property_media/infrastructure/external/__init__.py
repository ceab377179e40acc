"""External services: media storage."""
