"""Infrastructure adapters: storage backends, cache, logging."""
