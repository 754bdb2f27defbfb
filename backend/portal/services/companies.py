from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from portal.core.errors import InvalidIdentifier, NotFound
from portal.core.security import Caller
from portal.models.company import Company, StatusEmpresa, TipoPessoa
from portal.schemas.company import CompanyCreate, CompanyUpdate
from portal.services.identifiers import is_valid_cnpj, is_valid_cpf, validate_document_pair
from portal.services.status import apply_transition, initial_status

logger = logging.getLogger(__name__)

IDENTITY_FIELDS: dict[TipoPessoa, tuple[str, ...]] = {
    TipoPessoa.JURIDICA: ("razao_social", "cnpj"),
    TipoPessoa.FISICA: ("nome", "cpf"),
    TipoPessoa.ESTRANGEIRA: ("razao_social", "identificador_estrangeiro"),
}
_ALL_IDENTITY_FIELDS = {"razao_social", "cnpj", "nome", "cpf", "identificador_estrangeiro"}

# Columns that cannot be cleared through a patch
_NON_NULLABLE_FIELDS = {
    "tipo_pessoa",
    "nome_fantasia",
    "perfil",
    "faturamento_direto",
    "documento_comprobatorio",
}


def validate_identification(data: dict) -> None:
    cnpj = data.get("cnpj")
    if cnpj and not is_valid_cnpj(cnpj):
        raise InvalidIdentifier("CNPJ fornecido inválido")

    cpf = data.get("cpf")
    if cpf and not is_valid_cpf(cpf):
        raise InvalidIdentifier("CPF inválido")


def create_company(db: Session, payload: CompanyCreate, caller: Caller) -> Company:
    data = payload.model_dump()
    tipo = payload.tipo_pessoa

    # identity fields of the other person types are never stored
    for field in _ALL_IDENTITY_FIELDS - set(IDENTITY_FIELDS[tipo]):
        data[field] = None
    if tipo is TipoPessoa.FISICA:
        data["nome"] = payload.nome
        data["razao_social"] = payload.nome

    validate_document_pair(data.get("documento_comprobatorio"), data.get("documento_opcional"))
    validate_identification(data)

    company = Company(**data, status=initial_status(caller.is_internal))
    db.add(company)
    db.commit()
    db.refresh(company)
    logger.info(
        "company_created id=%s tipo_pessoa=%s status=%s internal=%s subject=%s",
        company.id,
        company.tipo_pessoa.value,
        company.status.value,
        caller.is_internal,
        caller.subject,
    )
    return company


def list_companies(db: Session) -> list[Company]:
    return db.query(Company).order_by(Company.created_at.desc()).all()


def get_company(db: Session, company_id: str) -> Company:
    company = db.query(Company).filter(Company.id == company_id).first()
    if not company:
        raise NotFound("Empresa não encontrada")
    return company


def approve_company(db: Session, company_id: str) -> Company:
    company = get_company(db, company_id)
    apply_transition(company, StatusEmpresa.APROVADA)
    db.commit()
    db.refresh(company)
    logger.info("company_approved id=%s", company.id)
    return company


def reject_company(db: Session, company_id: str, motivo: str | None) -> Company:
    company = get_company(db, company_id)
    apply_transition(company, StatusEmpresa.REPROVADA, motivo)
    db.commit()
    db.refresh(company)
    logger.info("company_rejected id=%s", company.id)
    return company


def update_company(db: Session, company_id: str, payload: CompanyUpdate) -> Company:
    company = get_company(db, company_id)
    data = payload.model_dump(exclude_unset=True)

    for key in _NON_NULLABLE_FIELDS:
        if key in data and data[key] is None:
            data.pop(key)

    if data.get("documento_comprobatorio") or data.get("documento_opcional"):
        # only the documents in this patch are compared, stored ones are not merged in
        validate_document_pair(data.get("documento_comprobatorio"), data.get("documento_opcional"))

    tipo = data.get("tipo_pessoa", company.tipo_pessoa)
    if data.get("nome") and tipo is TipoPessoa.FISICA:
        data["razao_social"] = data["nome"]

    for key, value in data.items():
        setattr(company, key, value)
    db.commit()
    db.refresh(company)
    logger.info("company_updated id=%s fields=%s", company.id, ",".join(sorted(data)))
    return company
