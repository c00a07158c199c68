"""Read-side services over the normalized scripture document."""
