"""Feature packages (router + service + schemas per domain)."""
