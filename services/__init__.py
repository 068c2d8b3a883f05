"""Provider-facing services: summary generation and email delivery."""
