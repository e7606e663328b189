"""HTTP value types — requests, responses, headers, and wire shapes."""
