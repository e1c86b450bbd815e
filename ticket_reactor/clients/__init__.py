"""HTTP adapters for the ticket store, the workflow engine and SNS."""

from .sns import SnsSubscriptionConfirmer, SubscriptionConfirmationError
from .tickets import HttpTicketStore
from .workflow import HttpWorkflowSignaler

__all__ = [
    "HttpTicketStore",
    "HttpWorkflowSignaler",
    "SnsSubscriptionConfirmer",
    "SubscriptionConfirmationError",
]
