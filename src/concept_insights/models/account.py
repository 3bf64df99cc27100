from typing import List, Optional

from pydantic import Field

from concept_insights.models.base import ServiceModel


class Account(ServiceModel):
    id: Optional[str] = Field(None, alias="account_id", description="Account identifier")
    user: Optional[str] = Field(None, description="Account user name")
    password: Optional[str] = Field(None, description="Account password, when returned by the service")


class Accounts(ServiceModel):
    accounts: List[Account] = Field(default_factory=list, description="Accounts visible to the credentials")
