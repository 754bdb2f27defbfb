from __future__ import annotations

import argparse
import json
import sys
from typing import Optional, Sequence

from portal.client.api import ApiError, CompanyApiClient
from portal.client.documents import DocumentError, encode_document
from portal.client.forms import (
    PERFIL_LABELS,
    PERFIS,
    TIPOS_PESSOA,
    available_actions,
    status_label,
    validate_registration,
    validate_reject_reason,
)
from portal.core.logging import LEVELS, configure_logging
from portal.services.identifiers import format_cnpj, format_cpf

# argparse dest -> JSON key
_FIELD_OPTIONS = (
    ("tipo_pessoa", "tipoPessoa"),
    ("razao_social", "razaoSocial"),
    ("cnpj", "cnpj"),
    ("nome", "nome"),
    ("cpf", "cpf"),
    ("identificador_estrangeiro", "identificadorEstrangeiro"),
    ("nome_fantasia", "nomeFantasia"),
    ("perfil", "perfil"),
    ("usuario_responsavel", "usuarioResponsavel"),
)


def _add_field_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--tipo-pessoa", choices=TIPOS_PESSOA)
    parser.add_argument("--razao-social")
    parser.add_argument("--cnpj")
    parser.add_argument("--nome")
    parser.add_argument("--cpf")
    parser.add_argument("--identificador-estrangeiro")
    parser.add_argument("--nome-fantasia")
    parser.add_argument("--perfil", choices=PERFIS)
    parser.add_argument("--usuario-responsavel")
    parser.add_argument("--documento", help="documento comprobatório (pdf, png, jpg, jpeg)")
    parser.add_argument("--documento-opcional")


def _payload_from_args(args: argparse.Namespace) -> dict:
    payload = {}
    for dest, key in _FIELD_OPTIONS:
        value = getattr(args, dest, None)
        if value is not None:
            payload[key] = value
    if args.documento:
        payload["documentoComprobatorio"] = encode_document(args.documento)
    if args.documento_opcional:
        payload["documentoOpcional"] = encode_document(args.documento_opcional)
    return payload


def _identifier(company: dict) -> str:
    if company.get("cnpj"):
        return format_cnpj(company["cnpj"])
    if company.get("cpf"):
        return format_cpf(company["cpf"])
    return company.get("identificadorEstrangeiro") or "-"


def _describe(company: dict) -> str:
    line = (
        f"{company['id']}  [{status_label(company.get('status'))}]  "
        f"{company.get('nomeFantasia', '')}  ({company.get('razaoSocial') or '-'})  "
        f"{_identifier(company)}  {PERFIL_LABELS.get(company.get('perfil'), company.get('perfil'))}"
    )
    if company.get("faturamentoDireto"):
        line += "  faturamento direto"
    actions = available_actions(company)
    if actions:
        line += "  ações: " + "/".join(actions)
    if company.get("motivoReprovacao"):
        line += f"\n    Motivo da reprovação: {company['motivoReprovacao']}"
    return line


def cmd_register(client: CompanyApiClient, args: argparse.Namespace) -> int:
    payload = _payload_from_args(args)
    payload["faturamentoDireto"] = bool(args.faturamento_direto)
    errors = validate_registration(payload)
    if errors:
        print(f"Erro: {errors[0]}", file=sys.stderr)
        return 1
    result = client.create(payload, internal=args.internal)
    print(result["message"])
    print(_describe(result["data"]))
    return 0


def cmd_list(client: CompanyApiClient, args: argparse.Namespace) -> int:
    companies = client.list()
    if not companies:
        print("Nenhuma empresa cadastrada")
        return 0
    for company in companies:
        print(_describe(company))
    return 0


def cmd_show(client: CompanyApiClient, args: argparse.Namespace) -> int:
    company = client.get(args.id)
    if args.json:
        print(json.dumps(company, ensure_ascii=False, indent=2))
    else:
        print(_describe(company))
    return 0


def cmd_approve(client: CompanyApiClient, args: argparse.Namespace) -> int:
    result = client.approve(args.id)
    print(result["message"])
    return 0


def cmd_reject(client: CompanyApiClient, args: argparse.Namespace) -> int:
    try:
        motivo = validate_reject_reason(args.motivo)
    except ValueError as exc:
        print(f"Atenção: {exc}", file=sys.stderr)
        return 1
    result = client.reject(args.id, motivo)
    print(result["message"])
    return 0


def cmd_update(client: CompanyApiClient, args: argparse.Namespace) -> int:
    payload = _payload_from_args(args)
    if args.faturamento_direto is not None:
        payload["faturamentoDireto"] = args.faturamento_direto
    if not payload:
        print("Erro: nenhum campo informado para atualização", file=sys.stderr)
        return 1
    result = client.update(args.id, payload)
    print(result["message"])
    print(_describe(result["data"]))
    return 0


def cmd_issue_token(args: argparse.Namespace) -> int:
    # signs with the server SECRET_KEY, so it only makes sense next to the API settings
    from portal.core.security import CallerRole, create_caller_token

    print(create_caller_token(CallerRole(args.role), subject=args.subject))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="portal", description="Portal de Cadastro de Empresas")
    parser.add_argument("--api-url", help="base URL of the API (default: $PORTAL_API_URL)")
    parser.add_argument("--token", help="caller token (default: $PORTAL_TOKEN)")
    parser.add_argument("--log-level", type=str.upper, choices=LEVELS, default="WARNING")
    sub = parser.add_subparsers(dest="command", required=True)

    register = sub.add_parser("register", help="cadastrar empresa")
    _add_field_options(register)
    register.add_argument("--faturamento-direto", action="store_true")
    register.add_argument("--internal", action="store_true", help="cadastro interno, já aprovado")
    register.set_defaults(handler=cmd_register)

    sub.add_parser("list", help="listar empresas").set_defaults(handler=cmd_list)

    show = sub.add_parser("show", help="detalhar empresa")
    show.add_argument("id")
    show.add_argument("--json", action="store_true")
    show.set_defaults(handler=cmd_show)

    approve = sub.add_parser("approve", help="aprovar empresa")
    approve.add_argument("id")
    approve.set_defaults(handler=cmd_approve)

    reject = sub.add_parser("reject", help="reprovar empresa")
    reject.add_argument("id")
    reject.add_argument("--motivo", required=True)
    reject.set_defaults(handler=cmd_reject)

    update = sub.add_parser("update", help="atualizar empresa")
    update.add_argument("id")
    _add_field_options(update)
    update.add_argument(
        "--faturamento-direto",
        dest="faturamento_direto",
        action=argparse.BooleanOptionalAction,
        default=None,
    )
    update.set_defaults(handler=cmd_update)

    token = sub.add_parser("issue-token", help="emitir token de chamador")
    token.add_argument("--role", choices=("INTERNAL", "EXTERNAL"), default="INTERNAL")
    token.add_argument("--subject")
    token.set_defaults(handler=None)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level, target="cli")

    if args.command == "issue-token":
        return cmd_issue_token(args)

    try:
        with CompanyApiClient(args.api_url, token=args.token) as client:
            return args.handler(client, args)
    except (ApiError, DocumentError) as exc:
        print(f"Erro: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
