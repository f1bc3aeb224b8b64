"""
Filtros em memória sobre coleções já carregadas.

Listagens trazem a coleção inteira (sem paginação) e a busca acontece
aqui, sem montar consultas no banco.
"""

import uuid
from datetime import date
from typing import Iterable

from processia.models.audit import AuditLog
from processia.models.processo import Processo
from processia.models.usuario import UserProfile

ACTION_LABELS = {
    "CREATE_USER": "Criar Usuário",
    "UPDATE_USER": "Atualizar Usuário",
    "DELETE_USER": "Excluir Usuário",
    "CREATE_PROCESS": "Criar Processo",
    "UPDATE_PROCESS": "Atualizar Processo",
    "DELETE_PROCESS": "Excluir Processo",
    "VIEW_PROCESS": "Visualizar Processo",
    "LOGIN": "Login",
    "LOGOUT": "Logout",
}


def rotulo_acao(action_type: str) -> str:
    """Rótulo em português da ação; ações desconhecidas ficam como estão."""
    return ACTION_LABELS.get(action_type, action_type)


def filtrar_processos(processos: Iterable[Processo], busca: str | None) -> list[Processo]:
    """
    Substring sem diferenciar maiúsculas sobre "<titulo> <numero_processo>".

    Ex.: "1234" encontra "0001234-56.2024.5.02.0001".
    """
    processos = list(processos)
    if not busca:
        return processos

    termo = busca.lower()
    return [
        p for p in processos
        if termo in f"{p.titulo} {p.numero_processo or ''}".lower()
    ]


def _identificacao(usuario: UserProfile | None) -> tuple[str, str]:
    if usuario is None:
        return "", ""
    return usuario.nome or "", usuario.email or ""


def filtrar_logs(
    logs: Iterable[AuditLog],
    usuarios: dict[uuid.UUID, UserProfile],
    action_type: str | None = None,
    user_id: uuid.UUID | None = None,
    dia: date | None = None,
    termo: str | None = None,
) -> list[AuditLog]:
    """
    Filtra eventos de auditoria.

    Ação e usuário por igualdade, dia pela data do evento e termo por
    substring no rótulo da ação, nome/email do usuário ou tipo do recurso.
    """
    resultado = []
    termo_lower = termo.lower() if termo else None

    for log in logs:
        if action_type and log.action_type != action_type:
            continue
        if user_id and log.user_id != user_id:
            continue
        if dia and log.created_at.date() != dia:
            continue
        if termo_lower:
            campos = (
                rotulo_acao(log.action_type),
                *_identificacao(usuarios.get(log.user_id)),
                log.resource_type,
            )
            if not any(termo_lower in campo.lower() for campo in campos):
                continue
        resultado.append(log)

    return resultado
