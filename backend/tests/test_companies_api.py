import pytest

from portal.core.config import settings
from portal.core.security import CallerRole, create_caller_token

DOC_A = "data:application/pdf;base64,QUFBQQ=="
DOC_B = "data:image/jpeg;base64,QkJCQg=="


def _payload(**overrides) -> dict:
    data = {
        "tipoPessoa": "JURIDICA",
        "razaoSocial": "Agência Beta Ltda",
        "cnpj": "11444777000161",
        "nomeFantasia": "Beta Cargo",
        "perfil": "AGENTE_CARGA",
        "faturamentoDireto": True,
        "documentoComprobatorio": DOC_A,
    }
    data.update(overrides)
    return data


def _create(client, **overrides) -> dict:
    response = client.post("/companies", json=_payload(**overrides))
    assert response.status_code == 201, response.text
    return response.json()["data"]


def test_create_returns_envelope(client):
    response = client.post("/companies", json=_payload())
    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Empresa cadastrada com sucesso"
    company = body["data"]
    assert company["status"] == "PENDENTE"
    assert company["tipoPessoa"] == "JURIDICA"
    assert company["nomeFantasia"] == "Beta Cargo"
    assert company["faturamentoDireto"] is True
    assert company["documentoComprobatorio"] == DOC_A
    assert company["motivoReprovacao"] is None
    assert "createdAt" in company and "updatedAt" in company


def test_create_fisica(client):
    company = _create(
        client,
        tipoPessoa="FISICA",
        razaoSocial=None,
        cnpj=None,
        nome="João Pereira",
        cpf="529.982.247-25",
        perfil="BENEFICIARIO",
    )
    assert company["razaoSocial"] == "João Pereira"
    assert company["cpf"] == "52998224725"
    assert company["cnpj"] is None


def test_create_internal_flag_auto_approves(client):
    response = client.post("/companies?internal=true", json=_payload(usuarioResponsavel="ana"))
    assert response.status_code == 201
    assert response.json()["data"]["status"] == "APROVADA"
    assert response.json()["data"]["usuarioResponsavel"] == "ana"


def test_create_internal_false_is_pending(client):
    response = client.post("/companies?internal=false", json=_payload())
    assert response.json()["data"]["status"] == "PENDENTE"


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"cnpj": "11111111111111"}, "CNPJ fornecido inválido"),
        ({"documentoOpcional": DOC_A}, "Arquivo duplicado"),
        ({"cnpj": None}, "CNPJ é obrigatório"),
        ({"nomeFantasia": "AB"}, "Nome Fantasia deve ter entre 3 e 255 caracteres"),
        ({"documentoComprobatorio": ""}, "É necessário enviar os arquivos obrigatórios para prosseguir"),
        ({"perfil": "OUTRO"}, "Selecione um perfil para a empresa"),
        (
            {"tipoPessoa": "FISICA", "nome": "Ana Lima", "cpf": "11111111111"},
            "CPF inválido",
        ),
    ],
)
def test_create_validation_errors(client, overrides, message):
    response = client.post("/companies", json=_payload(**overrides))
    assert response.status_code == 400
    assert response.json() == {"detail": message}
    assert client.get("/companies").json() == []


def test_create_missing_field_names_the_field(client):
    payload = _payload()
    payload.pop("nomeFantasia")
    response = client.post("/companies", json=payload)
    assert response.status_code == 400
    assert response.json()["detail"].startswith("nomeFantasia:")


def test_list_newest_first(client):
    first = _create(client, nomeFantasia="Primeira")
    second = _create(client, nomeFantasia="Segunda")
    response = client.get("/companies")
    assert response.status_code == 200
    ids = [item["id"] for item in response.json()]
    assert ids == [second["id"], first["id"]]


def test_get_company(client):
    company = _create(client)
    response = client.get(f"/companies/{company['id']}")
    assert response.status_code == 200
    assert response.json()["id"] == company["id"]


def test_get_unknown_company(client):
    response = client.get("/companies/does-not-exist")
    assert response.status_code == 404
    assert response.json() == {"detail": "Empresa não encontrada"}


def test_versioned_prefix_serves_same_routes(client):
    company = _create(client)
    response = client.get(f"{settings.API_V1_STR}/companies/{company['id']}")
    assert response.status_code == 200


def test_approve(client):
    company = _create(client)
    response = client.patch(f"/companies/{company['id']}/approve")
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Empresa aprovada com sucesso"
    assert body["data"]["status"] == "APROVADA"


def test_reject(client):
    company = _create(client)
    response = client.patch(
        f"/companies/{company['id']}/reject", json={"motivo": "Comprovante vencido"}
    )
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Empresa reprovada com sucesso"
    assert body["data"]["status"] == "REPROVADA"
    assert body["data"]["motivoReprovacao"] == "Comprovante vencido"


def test_approve_then_reject(client):
    company = _create(client)
    client.patch(f"/companies/{company['id']}/approve")
    response = client.patch(f"/companies/{company['id']}/reject", json={"motivo": "Revisto"})
    assert response.json()["data"]["status"] == "REPROVADA"
    assert client.get(f"/companies/{company['id']}").json()["motivoReprovacao"] == "Revisto"


def test_reject_then_approve(client):
    company = _create(client)
    client.patch(f"/companies/{company['id']}/reject", json={"motivo": "Revisto"})
    response = client.patch(f"/companies/{company['id']}/approve")
    assert response.json()["data"]["status"] == "APROVADA"
    assert response.json()["data"]["motivoReprovacao"] is None


@pytest.mark.parametrize("body", [None, {}, {"motivo": ""}])
def test_reject_requires_reason(client, body):
    company = _create(client)
    kwargs = {"json": body} if body is not None else {}
    response = client.patch(f"/companies/{company['id']}/reject", **kwargs)
    assert response.status_code == 400
    assert response.json() == {"detail": "Informe o motivo da reprovação"}


@pytest.mark.parametrize("suffix", ["/approve", "/reject"])
def test_review_unknown_company(client, suffix):
    response = client.patch(f"/companies/missing{suffix}", json={"motivo": "x"})
    assert response.status_code == 404


def test_update(client):
    company = _create(client)
    response = client.patch(
        f"/companies/{company['id']}",
        json={"nomeFantasia": "Beta Logística", "faturamentoDireto": False},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Empresa atualizada com sucesso"
    assert body["data"]["nomeFantasia"] == "Beta Logística"
    assert body["data"]["faturamentoDireto"] is False
    assert body["data"]["razaoSocial"] == "Agência Beta Ltda"


def test_update_duplicate_documents(client):
    company = _create(client)
    response = client.patch(
        f"/companies/{company['id']}",
        json={"documentoComprobatorio": DOC_B, "documentoOpcional": DOC_B},
    )
    assert response.status_code == 400
    assert response.json() == {"detail": "Arquivo duplicado"}


@pytest.mark.parametrize(
    "patch, message",
    [
        ({"nomeFantasia": "   "}, "Nome Fantasia é obrigatório"),
        ({"cnpj": "1" * 20}, "CNPJ inválido"),
        ({"cpf": "1" * 12}, "CPF inválido"),
        ({"razaoSocial": "r" * 300}, "Razão Social deve ter entre 3 e 255 caracteres"),
        ({"identificadorEstrangeiro": "i" * 150}, "Identificador estrangeiro deve ter entre 3 e 100 caracteres"),
        ({"usuarioResponsavel": "u" * 300}, "Usuário responsável deve ter entre 1 e 255 caracteres"),
    ],
)
def test_update_validation_errors(client, patch, message):
    company = _create(client)
    response = client.patch(f"/companies/{company['id']}", json=patch)
    assert response.status_code == 400
    assert response.json() == {"detail": message}
    stored = client.get(f"/companies/{company['id']}").json()
    assert stored["nomeFantasia"] == "Beta Cargo"
    assert stored["cnpj"] == "11444777000161"


def test_create_oversized_usuario_responsavel(client):
    response = client.post("/companies", json=_payload(usuarioResponsavel="u" * 300))
    assert response.status_code == 400
    assert response.json() == {"detail": "Usuário responsável deve ter entre 1 e 255 caracteres"}


def test_update_unknown_company(client):
    response = client.patch("/companies/missing", json={"nomeFantasia": "Nova"})
    assert response.status_code == 404


class TestCallerRole:
    def test_internal_token_auto_approves(self, client):
        token = create_caller_token(CallerRole.INTERNAL, subject="ana")
        response = client.post(
            "/companies",
            json=_payload(),
            headers={"Authorization": f"Bearer {token}"},
        )
        assert response.status_code == 201
        assert response.json()["data"]["status"] == "APROVADA"

    def test_external_token_is_pending(self, client):
        token = create_caller_token(CallerRole.EXTERNAL)
        response = client.post(
            "/companies",
            json=_payload(),
            headers={"Authorization": f"Bearer {token}"},
        )
        assert response.json()["data"]["status"] == "PENDENTE"

    def test_invalid_token_rejected(self, client):
        response = client.post(
            "/companies",
            json=_payload(),
            headers={"Authorization": "Bearer not-a-token"},
        )
        assert response.status_code == 401

    def test_query_flag_ignored_when_disabled(self, client, monkeypatch):
        monkeypatch.setattr(settings, "ALLOW_INTERNAL_QUERY_FLAG", False)
        response = client.post("/companies?internal=true", json=_payload())
        assert response.status_code == 201
        assert response.json()["data"]["status"] == "PENDENTE"
