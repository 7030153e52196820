"""Sample pipelines built on orca."""
