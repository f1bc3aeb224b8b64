"""
Service de Processos.

Cadastro, edição, listagem e exclusão de processos, com envio dos
anexos ao endpoint de arquivos do orquestrador.
"""

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from processia.ai.webhook_client import WebhookClient
from processia.core.arquivos import Arquivo, validar_arquivo
from processia.core.config import settings
from processia.core.dependencies import AuthContext
from processia.core.exceptions import ResourceNotFoundError, StorageError
from processia.models.processo import Processo
from processia.repositories.processo_repository import ProcessoRepository
from processia.schemas.processo import (
    ProcessoCreate,
    ProcessoResponse,
    ProcessoSalvo,
    ProcessoUpdate,
)
from processia.services.audit_service import AuditService
from processia.services.filtros import filtrar_processos

logger = structlog.get_logger()


class ProcessoService:
    """
    Service para operações com Processo.

    Anexos são enviados um por vez, sem retentativa. Uma falha de upload
    não desfaz o processo já salvo: o resultado volta com avisos.
    """

    def __init__(
        self,
        db: AsyncSession,
        user: AuthContext,
        webhook: WebhookClient | None = None,
    ):
        self._db = db
        self._user = user
        self._webhook = webhook or WebhookClient()
        self._repo = ProcessoRepository(db)
        self._audit = AuditService(db)

    async def buscar_processo(self, processo_id: int) -> Processo:
        """Busca processo por ID."""
        processo = await self._repo.get_by_id(processo_id)
        if not processo:
            raise ResourceNotFoundError("Processo", processo_id)
        return processo

    async def visualizar_processo(self, processo_id: int) -> Processo:
        """Busca processo e registra a visualização."""
        processo = await self.buscar_processo(processo_id)
        await self._audit.registrar(
            self._user.user_id, "VIEW_PROCESS", "PROCESS", processo.id
        )
        return processo

    async def listar_processos(self, busca: str | None = None) -> list[Processo]:
        """Todos os processos, mais recentes primeiro, filtrados pela busca."""
        processos = await self._repo.get_all()
        await self._audit.registrar(self._user.user_id, "VIEW_PROCESS", "PROCESS")
        return filtrar_processos(processos, busca)

    async def criar_processo(
        self,
        dados: ProcessoCreate,
        arquivos: list[Arquivo] | None = None,
    ) -> ProcessoSalvo:
        """
        Cria processo, avisa o orquestrador e envia os anexos.
        """
        processo = await self._repo.create(
            **dados.model_dump(),
            user_id=self._user.user_id,
        )

        logger.info(
            "Processo criado",
            processo_id=processo.id,
            numero=processo.numero_processo,
        )

        await self._webhook.notificar(
            settings.WEBHOOK_AGENT_URL,
            {
                "action": "createProcess",
                "process_id": str(processo.id),
                "titulo": processo.titulo,
                "numero_processo": processo.numero_processo,
                "status": processo.status.value,
                "user": self._user.user_id_str,
            },
        )

        resultado = await self._enviar_anexos(processo, arquivos or [], "criado")
        await self._audit.registrar(
            self._user.user_id, "CREATE_PROCESS", "PROCESS", processo.id
        )
        return resultado

    async def atualizar_processo(
        self,
        processo_id: int,
        dados: ProcessoUpdate,
        arquivos: list[Arquivo] | None = None,
    ) -> ProcessoSalvo:
        """
        Atualiza título, número, descrição e status.

        Novos anexos são acrescentados aos existentes.
        """
        processo = await self.buscar_processo(processo_id)

        # Substitui todos os campos: número e descrição podem ser apagados
        update_data = dados.model_dump()
        if dados.status is None:
            update_data.pop("status")
        for key, value in update_data.items():
            setattr(processo, key, value)
        await self._db.commit()
        await self._db.refresh(processo)

        logger.info(
            "Processo atualizado",
            processo_id=processo_id,
            campos=list(update_data.keys()),
        )

        resultado = await self._enviar_anexos(processo, arquivos or [], "atualizado")
        await self._audit.registrar(
            self._user.user_id, "UPDATE_PROCESS", "PROCESS", processo_id
        )
        return resultado

    async def excluir_processo(self, processo_id: int) -> None:
        """Remove o processo com sessões, mensagens e histórico."""
        removido = await self._repo.delete_cascade(processo_id)
        if not removido:
            raise ResourceNotFoundError("Processo", processo_id)

        logger.info("Processo removido", processo_id=processo_id)
        await self._audit.registrar(
            self._user.user_id, "DELETE_PROCESS", "PROCESS", processo_id
        )

    async def _enviar_anexos(
        self,
        processo: Processo,
        arquivos: list[Arquivo],
        verbo: str,
    ) -> ProcessoSalvo:
        enviados: list[str] = []
        com_erro: list[str] = []

        for arquivo in arquivos:
            try:
                validar_arquivo(len(arquivo.conteudo), arquivo.content_type)
                url = await self._webhook.enviar_arquivo(processo.id, arquivo)
            except StorageError as e:
                logger.warning(
                    "Erro ao enviar anexo",
                    processo_id=processo.id,
                    arquivo=arquivo.nome,
                    error=e.message,
                )
                com_erro.append(arquivo.nome)
                continue
            enviados.append(url)

        if enviados:
            processo = await self._repo.adicionar_arquivos(processo, enviados)

        avisos = []
        if com_erro:
            avisos.append(
                f"O processo foi {verbo}, mas houve um erro ao processar alguns arquivos."
            )

        return ProcessoSalvo(
            processo=ProcessoResponse.model_validate(processo),
            arquivos_enviados=enviados,
            arquivos_com_erro=com_erro,
            avisos=avisos,
        )
