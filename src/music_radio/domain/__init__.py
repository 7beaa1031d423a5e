"""Domain layer: tracks, the radio store and its text format."""
