from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator, model_validator
from pydantic.alias_generators import to_camel

from portal.models.company import PerfilEmpresa, StatusEmpresa, TipoPessoa
from portal.services.identifiers import normalize_digits

REQUIRED_DOCUMENT_MESSAGE = "É necessário enviar os arquivos obrigatórios para prosseguir"

# column sizes of the empresas table
CNPJ_LENGTH = 14
CPF_LENGTH = 11
NAME_MAX_LENGTH = 255
IDENTIFIER_MAX_LENGTH = 100


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _check_length(value: Optional[str], label: str, minimum: int, maximum: int) -> None:
    if value is None:
        return
    if not minimum <= len(value) <= maximum:
        raise ValueError(f"{label} deve ter entre {minimum} e {maximum} caracteres")


def _strip_or_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.strip() or None


def _required_text(
    value: Optional[str], message: str, label: str, minimum: int, maximum: int
) -> Optional[str]:
    """Strip ``value`` and enforce its bounds; ``None`` means the field was not sent."""
    if value is None:
        return None
    value = value.strip()
    if not value:
        raise ValueError(message)
    _check_length(value, label, minimum, maximum)
    return value


def _check_digits(value: Optional[str], length: int, message: str) -> Optional[str]:
    if value is not None and len(value) != length:
        raise ValueError(message)
    return value


def _digits_or_none(value):
    if value is None:
        return None
    if not isinstance(value, str):
        value = str(value)
    return normalize_digits(value) or None


def _choice(value, enum_cls, message: str):
    if isinstance(value, enum_cls) or value is None:
        return value
    if isinstance(value, str) and value.strip().upper() in enum_cls.__members__:
        return enum_cls[value.strip().upper()]
    raise ValueError(message)


def _usuario_responsavel(value: Optional[str]) -> Optional[str]:
    value = _strip_or_none(value)
    _check_length(value, "Usuário responsável", 1, NAME_MAX_LENGTH)
    return value


class CompanyCreate(CamelModel):
    tipo_pessoa: TipoPessoa
    razao_social: Optional[str] = None
    cnpj: Optional[str] = None
    nome: Optional[str] = None
    cpf: Optional[str] = None
    identificador_estrangeiro: Optional[str] = None
    nome_fantasia: str
    perfil: PerfilEmpresa
    faturamento_direto: bool = False
    documento_comprobatorio: Optional[str] = None
    documento_opcional: Optional[str] = None
    usuario_responsavel: Optional[str] = None

    @field_validator("tipo_pessoa", mode="before")
    @classmethod
    def _validate_tipo_pessoa(cls, value):
        return _choice(value, TipoPessoa, "Tipo de pessoa inválido")

    @field_validator("perfil", mode="before")
    @classmethod
    def _validate_perfil(cls, value):
        return _choice(value, PerfilEmpresa, "Selecione um perfil para a empresa")

    @field_validator("cnpj", "cpf", mode="before")
    @classmethod
    def _normalize_tax_ids(cls, value):
        return _digits_or_none(value)

    @field_validator("razao_social", "nome", "identificador_estrangeiro")
    @classmethod
    def _strip_identity(cls, value: Optional[str]) -> Optional[str]:
        return _strip_or_none(value)

    @field_validator("usuario_responsavel")
    @classmethod
    def _validate_usuario_responsavel(cls, value: Optional[str]) -> Optional[str]:
        return _usuario_responsavel(value)

    @field_validator("nome_fantasia")
    @classmethod
    def _validate_nome_fantasia(cls, value: str) -> str:
        return _required_text(value, "Nome Fantasia é obrigatório", "Nome Fantasia", 3, NAME_MAX_LENGTH)

    @model_validator(mode="after")
    def _validate_by_tipo_pessoa(self):
        tipo = self.tipo_pessoa

        if tipo in (TipoPessoa.JURIDICA, TipoPessoa.ESTRANGEIRA):
            if not self.razao_social:
                raise ValueError("Razão Social é obrigatória")
            _check_length(self.razao_social, "Razão Social", 3, NAME_MAX_LENGTH)

        if tipo is TipoPessoa.JURIDICA:
            if not self.cnpj:
                raise ValueError("CNPJ é obrigatório")
            _check_digits(self.cnpj, CNPJ_LENGTH, "CNPJ inválido")

        if tipo is TipoPessoa.FISICA:
            if not self.nome:
                raise ValueError("Nome é obrigatório")
            _check_length(self.nome, "Nome", 3, NAME_MAX_LENGTH)
            if not self.cpf:
                raise ValueError("CPF é obrigatório")
            _check_digits(self.cpf, CPF_LENGTH, "CPF inválido")

        if tipo is TipoPessoa.ESTRANGEIRA:
            if not self.identificador_estrangeiro:
                raise ValueError("Identificador estrangeiro é obrigatório")
            _check_length(
                self.identificador_estrangeiro, "Identificador estrangeiro", 3, IDENTIFIER_MAX_LENGTH
            )

        if not self.documento_comprobatorio:
            raise ValueError(REQUIRED_DOCUMENT_MESSAGE)
        return self


class CompanyUpdate(CamelModel):
    tipo_pessoa: Optional[TipoPessoa] = None
    razao_social: Optional[str] = None
    cnpj: Optional[str] = None
    nome: Optional[str] = None
    cpf: Optional[str] = None
    identificador_estrangeiro: Optional[str] = None
    nome_fantasia: Optional[str] = None
    perfil: Optional[PerfilEmpresa] = None
    faturamento_direto: Optional[bool] = None
    documento_comprobatorio: Optional[str] = None
    documento_opcional: Optional[str] = None
    usuario_responsavel: Optional[str] = None

    @field_validator("tipo_pessoa", mode="before")
    @classmethod
    def _validate_tipo_pessoa(cls, value):
        return _choice(value, TipoPessoa, "Tipo de pessoa inválido")

    @field_validator("perfil", mode="before")
    @classmethod
    def _validate_perfil(cls, value):
        return _choice(value, PerfilEmpresa, "Selecione um perfil para a empresa")

    @field_validator("cnpj", "cpf", mode="before")
    @classmethod
    def _normalize_tax_ids(cls, value):
        return _digits_or_none(value)

    @field_validator("cnpj")
    @classmethod
    def _validate_cnpj(cls, value: Optional[str]) -> Optional[str]:
        return _check_digits(value, CNPJ_LENGTH, "CNPJ inválido")

    @field_validator("cpf")
    @classmethod
    def _validate_cpf(cls, value: Optional[str]) -> Optional[str]:
        return _check_digits(value, CPF_LENGTH, "CPF inválido")

    @field_validator("razao_social")
    @classmethod
    def _validate_razao_social(cls, value: Optional[str]) -> Optional[str]:
        return _required_text(value, "Razão Social é obrigatória", "Razão Social", 3, NAME_MAX_LENGTH)

    @field_validator("nome")
    @classmethod
    def _validate_nome(cls, value: Optional[str]) -> Optional[str]:
        return _required_text(value, "Nome é obrigatório", "Nome", 3, NAME_MAX_LENGTH)

    @field_validator("identificador_estrangeiro")
    @classmethod
    def _validate_identificador(cls, value: Optional[str]) -> Optional[str]:
        return _required_text(
            value,
            "Identificador estrangeiro é obrigatório",
            "Identificador estrangeiro",
            3,
            IDENTIFIER_MAX_LENGTH,
        )

    @field_validator("usuario_responsavel")
    @classmethod
    def _validate_usuario_responsavel(cls, value: Optional[str]) -> Optional[str]:
        return _usuario_responsavel(value)

    @field_validator("nome_fantasia")
    @classmethod
    def _validate_nome_fantasia(cls, value: Optional[str]) -> Optional[str]:
        return _required_text(value, "Nome Fantasia é obrigatório", "Nome Fantasia", 3, NAME_MAX_LENGTH)


class RejectRequest(BaseModel):
    motivo: Optional[str] = None


class CompanyOut(CamelModel):
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str
    tipo_pessoa: TipoPessoa
    razao_social: Optional[str] = None
    cnpj: Optional[str] = None
    nome: Optional[str] = None
    cpf: Optional[str] = None
    identificador_estrangeiro: Optional[str] = None
    nome_fantasia: str
    perfil: PerfilEmpresa
    faturamento_direto: bool
    status: StatusEmpresa
    documento_comprobatorio: Optional[str] = None
    documento_opcional: Optional[str] = None
    motivo_reprovacao: Optional[str] = None
    usuario_responsavel: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class CompanyEnvelope(CamelModel):
    message: str
    data: CompanyOut
