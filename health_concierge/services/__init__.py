"""Services used by the concierge runtime."""
