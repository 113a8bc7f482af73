"""Text templates rendered into Jira comments."""
