# catering/services/contracts.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from catering.core.logging_config import logger
from catering.errors import ContractError, NotFoundError
from catering.models.contract import ContractORM
from catering.repositories.contracts import ContractRepository
from catering.repositories.invoices import InvoiceRepository
from catering.services.functions_client import GENERATE_CONTRACT, FunctionsClient
from catering.workflow.status import transition

# invoice statuses from which a contract may be generated
CONTRACTABLE = {"approved", "payment_pending", "partially_paid", "paid", "overdue"}


class ContractService:
    def __init__(
        self,
        invoices: InvoiceRepository,
        contracts: ContractRepository,
        functions: FunctionsClient,
    ):
        self.invoices = invoices
        self.contracts = contracts
        self.functions = functions

    def get_contract(self, contract_id: int) -> ContractORM:
        contract = self.contracts.get(contract_id)
        if not contract:
            raise NotFoundError("Contract", contract_id)
        return contract

    def create_contract(self, invoice_id: int) -> ContractORM:
        invoice = self.invoices.get(invoice_id)
        if not invoice:
            raise NotFoundError("Estimate", invoice_id)
        if invoice.status not in CONTRACTABLE:
            raise ContractError(
                f"Estimate {invoice.id} is {invoice.status}; it must be approved before a contract is generated"
            )

        active = [c for c in self.contracts.for_invoice(invoice.id) if c.status != "cancelled"]
        if active:
            logger.info("contract_exists", contract_id=active[-1].id, invoice_id=invoice.id)
            return active[-1]

        contract_type = "government" if invoice.is_government_contract else "standard"
        result = self.functions.invoke(
            GENERATE_CONTRACT,
            {
                "invoiceId": invoice.id,
                "quoteId": invoice.quote_request_id,
                "contractType": contract_type,
            },
        )

        contract = self.contracts.create(
            invoice.id,
            contract_type=contract_type,
            status="generated",
            document_url=result.data.get("document_url") or result.data.get("url"),
        )
        self.contracts.record_status_change("contract", contract.id, None, "generated", "admin")
        self.contracts.save(contract)

        logger.info("contract_generated", contract_id=contract.id, invoice_id=invoice.id, dev=result.dev)
        return contract

    def mark_contract_sent(self, contract_id: int) -> ContractORM:
        contract = self.get_contract(contract_id)
        transition(contract, "contract", "sent", log=self.contracts, role="admin")
        contract.sent_at = datetime.now(timezone.utc)
        return self.contracts.save(contract)

    def mark_contract_signed(
        self,
        contract_id: int,
        signed_by: str,
        role: str = "admin",
        signed_at: Optional[datetime] = None,
    ) -> ContractORM:
        contract = self.get_contract(contract_id)
        transition(contract, "contract", "signed", log=self.contracts, role=role)
        contract.signed_by = signed_by
        contract.signed_at = signed_at or datetime.now(timezone.utc)
        contract = self.contracts.save(contract)

        logger.info("contract_signed", contract_id=contract.id, signed_by=signed_by)
        return contract
