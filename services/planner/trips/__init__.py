"""Trip lifecycle: date validation, participant batches, itinerary bucketing."""
