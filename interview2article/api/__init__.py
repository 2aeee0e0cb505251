"""HTTP API for the interview-to-article workflow."""
