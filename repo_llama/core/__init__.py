"""Core retrieval pipeline: chunking, ranking, prompt assembly and stream reassembly."""
