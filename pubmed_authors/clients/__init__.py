"""HTTP clients for the PubMed E-utilities."""

from .http import HttpClient, RetryPolicy
from .pubmed import PubMedClient

__all__ = [
    "HttpClient",
    "PubMedClient",
    "RetryPolicy",
]
