from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class PaymentIntentRequest(BaseModel):
    price: Optional[Union[str, float, int]] = None


class PaymentIntentResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    client_secret: str = Field(alias="clientSecret")
