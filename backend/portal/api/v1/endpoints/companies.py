from typing import Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from portal.core.security import Caller, get_submitting_caller
from portal.db.session import get_db
from portal.schemas.company import (
    CompanyCreate,
    CompanyEnvelope,
    CompanyOut,
    CompanyUpdate,
    RejectRequest,
)
from portal.services import companies as company_service

router = APIRouter()


def _envelope(message: str, company) -> CompanyEnvelope:
    return CompanyEnvelope(message=message, data=CompanyOut.model_validate(company))


@router.post("", response_model=CompanyEnvelope, status_code=status.HTTP_201_CREATED)
def create_company(
    payload: CompanyCreate,
    db: Session = Depends(get_db),
    caller: Caller = Depends(get_submitting_caller),
) -> CompanyEnvelope:
    company = company_service.create_company(db, payload, caller)
    return _envelope("Empresa cadastrada com sucesso", company)


@router.get("", response_model=list[CompanyOut])
def list_companies(db: Session = Depends(get_db)) -> list[CompanyOut]:
    return [CompanyOut.model_validate(company) for company in company_service.list_companies(db)]


@router.get("/{company_id}", response_model=CompanyOut)
def get_company(company_id: str, db: Session = Depends(get_db)) -> CompanyOut:
    return CompanyOut.model_validate(company_service.get_company(db, company_id))


@router.patch("/{company_id}/approve", response_model=CompanyEnvelope)
def approve_company(company_id: str, db: Session = Depends(get_db)) -> CompanyEnvelope:
    company = company_service.approve_company(db, company_id)
    return _envelope("Empresa aprovada com sucesso", company)


@router.patch("/{company_id}/reject", response_model=CompanyEnvelope)
def reject_company(
    company_id: str,
    payload: Optional[RejectRequest] = None,
    db: Session = Depends(get_db),
) -> CompanyEnvelope:
    motivo = payload.motivo if payload else None
    company = company_service.reject_company(db, company_id, motivo)
    return _envelope("Empresa reprovada com sucesso", company)


@router.patch("/{company_id}", response_model=CompanyEnvelope)
def update_company(
    company_id: str,
    payload: CompanyUpdate,
    db: Session = Depends(get_db),
) -> CompanyEnvelope:
    company = company_service.update_company(db, company_id, payload)
    return _envelope("Empresa atualizada com sucesso", company)
