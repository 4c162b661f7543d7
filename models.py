from dataclasses import dataclass
from typing import List, Protocol, runtime_checkable

UNKNOWN = "unknown"
UNKNOWN_MRR = -1.0
MAX_ACCOUNTS = 20

CUSTOMER_TYPES = ("Customer", "Inactive Customer")

# Platforms as they are named in Salesforce
PLATFORMS = (
    "3dcart",
    "BigCommerce",
    "CommerceV3",
    "Custom",
    "Magento",
    "Miva",
    "Netsuite",
    "Other",
    "Shopify",
    "Shopify Plus",
    "Yahoo",
)


class SourceError(Exception):
    """Raised by an upstream client when a query cannot be answered."""


@dataclass
class AccountRecord:
    website: str = UNKNOWN
    site_id: str = ""
    manager: str = UNKNOWN
    active: str = "Active"
    record_type: str = ""
    mrr: float = UNKNOWN_MRR
    family_mrr: float = UNKNOWN_MRR
    platform: str = UNKNOWN
    integration: str = UNKNOWN
    provider: str = UNKNOWN
    city: str = UNKNOWN
    state: str = UNKNOWN

    @property
    def is_customer(self) -> bool:
        return self.record_type in CUSTOMER_TYPES


@dataclass
class NpsInfo:
    manager: str
    mrr: float
    family_mrr: float


@dataclass
class NextopiaCustomer:
    id1: str
    id2: str
    name: str
    url: str
    type: str
    version: str
    system: str


@runtime_checkable
class AccountSource(Protocol):
    """Anything that can answer an account search; raises SourceError on failure."""

    def query_accounts(self, search: str) -> List[AccountRecord]:
        ...
