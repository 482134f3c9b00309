"""Bank directory lookups and beneficiary account validation."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional

from monnify.core.errors import MonnifyException
from monnify.schemas.banks import AccountValidation, Bank
from monnify.schemas.common import MonnifyResponse, require_value

if TYPE_CHECKING:
    from monnify.clients.http import HttpClient

logger = logging.getLogger(__name__)

BANKS_PATH = "/api/v1/banks"
ACCOUNT_VALIDATION_PATH = "/api/v1/disbursements/account/validate"


class BankService:
    def __init__(self, client: "HttpClient") -> None:
        self._client = client

    def get_all(self) -> MonnifyResponse[List[Bank]]:
        data = self._client.get(BANKS_PATH)
        return MonnifyResponse[List[Bank]].from_payload(data)

    def get_by_country(self, country_code: str) -> MonnifyResponse[List[Bank]]:
        code = require_value(country_code, "countryCode", "Country code")
        data = self._client.get(BANKS_PATH, query={"countryCode": code})
        return MonnifyResponse[List[Bank]].from_payload(data)

    def verify_account(
        self, account_number: str, bank_code: str
    ) -> MonnifyResponse[AccountValidation]:
        account = require_value(account_number, "accountNumber", "Account number")
        code = require_value(bank_code, "bankCode", "Bank code")
        data = self._client.post(
            ACCOUNT_VALIDATION_PATH, {"accountNumber": account, "bankCode": code}
        )
        return MonnifyResponse[AccountValidation].from_payload(data)

    def get_by_code(self, bank_code: str) -> Optional[Bank]:
        code = require_value(bank_code, "bankCode", "Bank code")
        for bank in self._banks():
            if bank.code == code:
                return bank
        return None

    def get_by_name(self, bank_name: str) -> Optional[Bank]:
        """First bank whose name contains ``bank_name``, ignoring case."""
        needle = require_value(bank_name, "bankName", "Bank name").lower()
        for bank in self._banks():
            if needle in bank.name.lower():
                return bank
        return None

    def get_account_holder_name(self, account_number: str, bank_code: str) -> Optional[str]:
        result = self.verify_account(account_number, bank_code)
        if result.response_body is None:
            return None
        return result.response_body.account_name

    def is_account_valid(self, account_number: str, bank_code: str) -> bool:
        try:
            name = self.get_account_holder_name(account_number, bank_code)
        except MonnifyException as exc:
            logger.info("Account %s at %s failed validation: %s", account_number, bank_code, exc)
            return False
        return bool(name)

    def _banks(self) -> List[Bank]:
        return self.get_all().response_body or []


__all__ = ["BankService"]
