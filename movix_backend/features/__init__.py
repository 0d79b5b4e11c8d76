"""Feature modules (index, browser)."""
