"""Hash distribution and throughput experiments."""
