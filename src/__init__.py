"""artRevolution: Timisoara cultural-event aggregation service."""
