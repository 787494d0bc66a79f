"""Health concierge chat core: specialist routing, emergency screening and conversation memory."""

__version__ = "1.0.0"
