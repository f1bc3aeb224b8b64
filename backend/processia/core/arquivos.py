"""
Validação e preparo de arquivos enviados pelo usuário.

Os arquivos não são armazenados por esta API: anexos de processo seguem
para o webhook de arquivos e anexos do chat de edição seguem em base64
dentro do envelope.
"""

import base64
from dataclasses import dataclass
from pathlib import Path

from processia.core.config import settings
from processia.core.exceptions import FileTooLargeError, InvalidFileTypeError

DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


@dataclass
class Arquivo:
    """Arquivo recebido em memória."""

    nome: str
    conteudo: bytes
    content_type: str

    @property
    def nome_seguro(self) -> str:
        # Remove path traversal
        return Path(self.nome).name


def validar_arquivo(
    tamanho: int,
    mime_type: str,
    allowed_types: list[str] | None = None,
) -> None:
    """Valida tamanho e tipo antes do envio."""
    max_size_bytes = settings.MAX_UPLOAD_SIZE_MB * 1024 * 1024
    if tamanho > max_size_bytes:
        raise FileTooLargeError(
            max_size_mb=settings.MAX_UPLOAD_SIZE_MB,
            actual_size_mb=tamanho / (1024 * 1024),
        )

    if allowed_types is not None and mime_type not in allowed_types:
        raise InvalidFileTypeError(mime_type=mime_type, allowed_types=allowed_types)


def classificar_anexo(nome: str, mime_type: str) -> str:
    """
    Classifica o anexo do chat de edição.

    Retorna um de: image, pdf, docx, html, other.
    """
    if mime_type.startswith("image"):
        return "image"
    if mime_type == "application/pdf":
        return "pdf"
    if mime_type == DOCX_MIME:
        return "docx"
    if mime_type == "text/html" or nome.endswith(".html"):
        return "html"
    return "other"


def codificar_base64(conteudo: bytes) -> str:
    """Corpo do arquivo em base64, sem prefixo data-URL."""
    return base64.b64encode(conteudo).decode("ascii")


def descrever_mensagem(texto: str, nome_arquivo: str | None, max_nome: int = 20) -> str:
    """
    Texto exibido para a mensagem do usuário no chat de edição.

    Texto e arquivo: texto, linha em branco e nome completo.
    Só arquivo: clipe e nome truncado.
    """
    if texto and nome_arquivo:
        return f"{texto}\n\n{nome_arquivo}"
    if nome_arquivo:
        nome = nome_arquivo if len(nome_arquivo) <= max_nome else nome_arquivo[:max_nome] + "..."
        return "📎" + nome
    return texto
