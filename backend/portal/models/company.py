import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Enum, Index, String, Text, func, text
from sqlalchemy.orm import Mapped, mapped_column

from portal.db.base import Base


class TipoPessoa(str, enum.Enum):
    JURIDICA = "JURIDICA"
    FISICA = "FISICA"
    ESTRANGEIRA = "ESTRANGEIRA"


class PerfilEmpresa(str, enum.Enum):
    DESPACHANTE = "DESPACHANTE"
    BENEFICIARIO = "BENEFICIARIO"
    CONSIGNATARIO = "CONSIGNATARIO"
    ARMADOR = "ARMADOR"
    AGENTE_CARGA = "AGENTE_CARGA"
    TRANSPORTADORA = "TRANSPORTADORA"


class StatusEmpresa(str, enum.Enum):
    PENDENTE = "PENDENTE"
    APROVADA = "APROVADA"
    REPROVADA = "REPROVADA"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Company(Base):
    __tablename__ = "empresas"

    __table_args__ = (
        Index("ix_empresas_created_at", "created_at"),
        Index("ix_empresas_status", "status"),
    )

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    tipo_pessoa: Mapped[TipoPessoa] = mapped_column(
        Enum(TipoPessoa, name="tipo_pessoa", create_constraint=True), nullable=False
    )
    razao_social: Mapped[str | None] = mapped_column(String(255), nullable=True)
    cnpj: Mapped[str | None] = mapped_column(String(14), nullable=True)
    nome: Mapped[str | None] = mapped_column(String(255), nullable=True)
    cpf: Mapped[str | None] = mapped_column(String(11), nullable=True)
    identificador_estrangeiro: Mapped[str | None] = mapped_column(String(100), nullable=True)
    nome_fantasia: Mapped[str] = mapped_column(String(255), nullable=False)
    perfil: Mapped[PerfilEmpresa] = mapped_column(
        Enum(PerfilEmpresa, name="perfil_empresa", create_constraint=True), nullable=False
    )
    faturamento_direto: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("false"), default=False
    )
    status: Mapped[StatusEmpresa] = mapped_column(
        Enum(StatusEmpresa, name="status_empresa", create_constraint=True),
        nullable=False,
        server_default=StatusEmpresa.PENDENTE.value,
        default=StatusEmpresa.PENDENTE,
    )
    # base64 data URLs, stored inline
    documento_comprobatorio: Mapped[str] = mapped_column(Text, nullable=False)
    documento_opcional: Mapped[str | None] = mapped_column(Text, nullable=True)
    motivo_reprovacao: Mapped[str | None] = mapped_column(Text, nullable=True)
    usuario_responsavel: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), default=_utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        default=_utcnow,
        onupdate=_utcnow,
        nullable=False,
    )
