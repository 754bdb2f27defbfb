from portal.db.base import Base
from portal.models.company import Company, PerfilEmpresa, StatusEmpresa, TipoPessoa

__all__ = [
    "Base",
    "Company",
    "PerfilEmpresa",
    "StatusEmpresa",
    "TipoPessoa",
]
