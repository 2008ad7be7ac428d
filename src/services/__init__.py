"""Business services: aggregation, enrichment, translation and moderation."""
