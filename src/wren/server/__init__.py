"""Request pipeline: secure headers, authorization gate, dispatch."""
