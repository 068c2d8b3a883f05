"""Python driver for the summarizer API."""
