"""API Schemas — request/response models for the HTTP layer."""
