# catering/routers/contracts.py
from fastapi import APIRouter, Depends

from catering.dependencies import get_contract_service
from catering.schemas.contract import ContractOut, ContractSignature
from catering.services.contracts import ContractService

router = APIRouter(prefix="/admin", tags=["contracts"])


@router.post("/estimates/{invoice_id}/contract", response_model=ContractOut, status_code=201)
def create_contract(invoice_id: int, svc: ContractService = Depends(get_contract_service)):
    return svc.create_contract(invoice_id)


@router.get("/contracts/{contract_id}", response_model=ContractOut)
def get_contract(contract_id: int, svc: ContractService = Depends(get_contract_service)):
    return svc.get_contract(contract_id)


@router.post("/contracts/{contract_id}/sent", response_model=ContractOut)
def mark_sent(contract_id: int, svc: ContractService = Depends(get_contract_service)):
    return svc.mark_contract_sent(contract_id)


@router.post("/contracts/{contract_id}/signed", response_model=ContractOut)
def mark_signed(
    contract_id: int,
    body: ContractSignature,
    svc: ContractService = Depends(get_contract_service),
):
    return svc.mark_contract_signed(contract_id, signed_by=body.signed_by, role=body.role)
