"""Flask JSON API over the comparison catalog."""
