"""Constants shared across cachesync modules."""
