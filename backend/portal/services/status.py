from __future__ import annotations

from portal.core.errors import InvalidTransition, ValidationError
from portal.models.company import Company, StatusEmpresa

# Re-approving a rejected company and rejecting an approved one are both
# allowed. Nothing goes back to PENDENTE.
ALLOWED_TRANSITIONS: dict[StatusEmpresa, frozenset[StatusEmpresa]] = {
    StatusEmpresa.PENDENTE: frozenset({StatusEmpresa.APROVADA, StatusEmpresa.REPROVADA}),
    StatusEmpresa.APROVADA: frozenset({StatusEmpresa.APROVADA, StatusEmpresa.REPROVADA}),
    StatusEmpresa.REPROVADA: frozenset({StatusEmpresa.APROVADA, StatusEmpresa.REPROVADA}),
}


def initial_status(is_internal: bool) -> StatusEmpresa:
    return StatusEmpresa.APROVADA if is_internal else StatusEmpresa.PENDENTE


def can_transition(current: StatusEmpresa, target: StatusEmpresa) -> bool:
    return target in ALLOWED_TRANSITIONS.get(current, frozenset())


def apply_transition(
    company: Company,
    target: StatusEmpresa,
    motivo: str | None = None,
) -> Company:
    """Move ``company`` to ``target``, keeping ``motivo_reprovacao`` set only while rejected."""
    current = StatusEmpresa(company.status)
    if not can_transition(current, target):
        raise InvalidTransition(
            f"Transição de status não permitida: {current.value} -> {target.value}"
        )

    if target is StatusEmpresa.REPROVADA:
        motivo = (motivo or "").strip()
        if not motivo:
            raise ValidationError("Informe o motivo da reprovação")
        company.motivo_reprovacao = motivo
    else:
        company.motivo_reprovacao = None

    company.status = target
    return company
