"""Request and response models for a single ``send_sms.php`` exchange."""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from anysms.models.enums import GatewayErrorCode

__all__ = ["SendRequest", "GatewayResponse", "SendResult"]


class SendRequest(BaseModel):
    """Outbound form payload, built fresh for every send."""

    model_config = ConfigDict(frozen=True)

    username: str
    password: str | None = None
    gateway: int
    sender: str
    phone_number: str
    message: str | None = None
    test: bool = False

    def to_form(self) -> dict[str, str]:
        """Form fields in the order the gateway documents them."""
        form: dict[str, str] = {
            "id": self.username,
            "pass": self.password or "",
            "gateway": str(self.gateway),
            "absender": self.sender,
            "nummer": self.phone_number,
        }
        if self.message:
            form["text"] = self.message
        form["xml"] = "1"
        if self.test:
            form["test"] = "1"
        return form


class GatewayResponse(BaseModel):
    """Status document returned by the gateway.

    Field aliases are the German element names used on the wire.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    error: GatewayErrorCode
    phone_number: str | None = Field(default=None, alias="nummer")
    message_id: int | None = Field(default=None, alias="msgid")
    cost: Decimal | None = Field(default=None, alias="preis")
    balance: Decimal | None = Field(default=None, alias="guthaben")
    credit_limit: Decimal | None = Field(default=None, alias="limit")

    def to_result(self) -> SendResult:
        return SendResult(
            phone_number=self.phone_number,
            message_id=self.message_id,
            costs=self.cost,
            balance=self.balance,
            credit_limit=self.credit_limit,
        )


class SendResult(BaseModel):
    """Outcome of a successfully accepted SMS."""

    model_config = ConfigDict(frozen=True)

    phone_number: str | None = None
    message_id: int | None = None
    costs: Decimal | None = None
    balance: Decimal | None = None
    credit_limit: Decimal | None = None
