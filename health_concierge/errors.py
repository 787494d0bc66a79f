"""Exception types raised across the Health Concierge server."""


class ConfigurationError(RuntimeError):
    """Static configuration (keywords, specialists, referral phrases) is inconsistent."""


class GenerationError(RuntimeError):
    """The generative text service did not return usable text."""


class RecordNotFoundError(KeyError):
    """A storage update referenced a record id that does not exist."""

    def __init__(self, kind: str, record_id: str):
        super().__init__(f"{kind} not found: {record_id}")
        self.kind = kind
        self.record_id = record_id

    def __str__(self) -> str:
        return self.args[0]
