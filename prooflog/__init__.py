"""Portfolio log with proof attachments and public profiles."""
