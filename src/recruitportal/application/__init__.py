"""Application layer: use cases over the stores."""
