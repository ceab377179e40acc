"""Infrastructure: storage backends and infrastructure exceptions."""
