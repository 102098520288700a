# catering/repositories/contracts.py
from __future__ import annotations

from typing import Any, List, Optional, Protocol

from catering.models.contract import ContractORM
from catering.repositories.base import SqlRepository, StatusLog


class ContractRepository(StatusLog, Protocol):
    def get(self, contract_id: int) -> Optional[ContractORM]: ...

    def for_invoice(self, invoice_id: int) -> List[ContractORM]: ...

    def create(self, invoice_id: int, **fields: Any) -> ContractORM: ...

    def save(self, contract: ContractORM) -> ContractORM: ...


class SqlContractRepository(SqlRepository):
    def get(self, contract_id: int) -> Optional[ContractORM]:
        return self.db.query(ContractORM).filter(ContractORM.id == contract_id).first()

    def for_invoice(self, invoice_id: int) -> List[ContractORM]:
        return (
            self.db.query(ContractORM)
            .filter(ContractORM.invoice_id == invoice_id)
            .order_by(ContractORM.id.asc())
            .all()
        )

    def create(self, invoice_id: int, **fields: Any) -> ContractORM:
        return self.save(ContractORM(invoice_id=invoice_id, **fields))
