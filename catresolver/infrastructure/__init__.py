"""Infrastructure: configuration and the search backend client."""
