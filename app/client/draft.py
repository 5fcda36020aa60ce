"""Local contract draft edited by the caller before it is committed"""

from dataclasses import dataclass
from typing import Any, Optional, Union

from ..domain.generation.schemas import GenerationRequest


@dataclass
class ContractDraft:
    client_name: str = ""
    event_date: str = ""
    event_venue: str = ""
    service_package: str = ""
    amount: Optional[Union[float, str]] = None
    content: str = ""
    is_generating: bool = False
    generation_progress: str = ""

    @property
    def can_commit(self) -> bool:
        """A draft is committable once it has a client and content and no generation is running"""
        return bool(self.client_name) and bool(self.content) and not self.is_generating

    def generation_request(self, vendor_type: str) -> GenerationRequest:
        return GenerationRequest(
            vendorType=vendor_type,
            clientName=self.client_name,
            eventDate=self.event_date,
            eventVenue=self.event_venue,
            servicePackage=self.service_package,
            amount=self.amount,
        )

    def create_payload(self) -> dict[str, Any]:
        return {
            "clientName": self.client_name,
            "eventDate": self.event_date,
            "eventVenue": self.event_venue,
            "servicePackage": self.service_package,
            "amount": self.amount,
            "content": self.content,
        }

    def reset(self) -> None:
        self.client_name = ""
        self.event_date = ""
        self.event_venue = ""
        self.service_package = ""
        self.amount = None
        self.content = ""
        self.is_generating = False
        self.generation_progress = ""
