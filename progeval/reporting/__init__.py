"""Turn analysis results into tables and charts for a report."""
