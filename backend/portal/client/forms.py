from __future__ import annotations

from typing import Any, Mapping

TIPOS_PESSOA = ("JURIDICA", "FISICA", "ESTRANGEIRA")
PERFIS = (
    "DESPACHANTE",
    "BENEFICIARIO",
    "CONSIGNATARIO",
    "ARMADOR",
    "AGENTE_CARGA",
    "TRANSPORTADORA",
)

STATUS_LABELS = {
    "PENDENTE": "Pendente",
    "APROVADA": "Aprovada",
    "REPROVADA": "Reprovada",
}

PERFIL_LABELS = {
    "DESPACHANTE": "Despachante",
    "BENEFICIARIO": "Beneficiário",
    "CONSIGNATARIO": "Consignatário",
    "ARMADOR": "Armador",
    "AGENTE_CARGA": "Agente de carga",
    "TRANSPORTADORA": "Transportadora",
}


def _text(values: Mapping[str, Any], key: str) -> str:
    value = values.get(key)
    return value.strip() if isinstance(value, str) else ""


def validate_registration(values: Mapping[str, Any]) -> list[str]:
    """Check a registration form before it is sent.

    Mirrors the web form: shape and length only. The server still runs the
    checksum and duplicate-document checks and is the one that decides.
    """
    errors: list[str] = []
    tipo = values.get("tipoPessoa")
    if tipo not in TIPOS_PESSOA:
        errors.append("Tipo de pessoa é obrigatório")

    if tipo in ("JURIDICA", "ESTRANGEIRA") and len(_text(values, "razaoSocial")) < 3:
        errors.append("Razão Social: mínimo de 3 caracteres")
    if tipo == "JURIDICA":
        cnpj = _text(values, "cnpj")
        if not cnpj.isdigit() or len(cnpj) != 14:
            errors.append("CNPJ inválido")
    if tipo == "FISICA":
        if len(_text(values, "nome")) < 3:
            errors.append("Nome: mínimo de 3 caracteres")
        cpf = _text(values, "cpf")
        if not cpf.isdigit() or len(cpf) != 11:
            errors.append("CPF inválido")
    if tipo == "ESTRANGEIRA" and len(_text(values, "identificadorEstrangeiro")) < 3:
        errors.append("Identificador estrangeiro: mínimo de 3 caracteres")

    if len(_text(values, "nomeFantasia")) < 3:
        errors.append("Nome Fantasia: mínimo de 3 caracteres")
    if values.get("perfil") not in PERFIS:
        errors.append("Selecione um perfil para a empresa")
    if not _text(values, "documentoComprobatorio"):
        errors.append("É necessário enviar os arquivos obrigatórios para prosseguir")
    return errors


def validate_reject_reason(motivo: str | None) -> str:
    motivo = (motivo or "").strip()
    if not motivo:
        raise ValueError("Informe o motivo da reprovação")
    return motivo


def status_label(status: str | None) -> str:
    return STATUS_LABELS.get(status or "", STATUS_LABELS["PENDENTE"])


def available_actions(company: Mapping[str, Any]) -> tuple[str, ...]:
    """Actions offered for a company in the listing: review only while pending."""
    if company.get("status") == "PENDENTE":
        return ("approve", "reject")
    return ()
