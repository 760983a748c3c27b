"""Shared error types for reasonbridge."""


class ReasonBridgeError(Exception):
    """Base error for all reasonbridge failures."""


class ConfigurationError(ReasonBridgeError):
    """The provider/model configuration is invalid or names something unknown.

    Always fatal: a misconfiguration is never retried.
    """

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Configuration error: {detail}")


class ProvenanceError(ReasonBridgeError):
    """Provenance was written twice or attached to the wrong kind of message."""

    def __init__(self, message_id: str, detail: str) -> None:
        self.message_id = message_id
        self.detail = detail
        super().__init__(f"Cannot annotate message {message_id}: {detail}")


class StreamFailure(ReasonBridgeError):
    """The model provider failed while the response was streaming."""

    def __init__(self, model_id: str, detail: str = "") -> None:
        self.model_id = model_id
        self.detail = detail
        msg = f"Model call to {model_id} failed"
        if detail:
            msg += f": {detail}"
        super().__init__(msg)
