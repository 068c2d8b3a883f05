"""HTTP routers for the summarizer API."""
