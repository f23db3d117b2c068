"""Application layer: services orchestrating the retrieval pipeline."""
