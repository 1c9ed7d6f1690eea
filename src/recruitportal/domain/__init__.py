"""Domain rules for applicants, tasks and subdomains."""
