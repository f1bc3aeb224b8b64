"""
Conversão de uploads e formulários para os tipos dos services.
"""

from fastapi import UploadFile
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from processia.core.arquivos import Arquivo
from processia.core.exceptions import ValidationError


async def ler_arquivo(upload: UploadFile) -> Arquivo:
    return Arquivo(
        nome=upload.filename or "arquivo",
        conteudo=await upload.read(),
        content_type=upload.content_type or "application/octet-stream",
    )


async def ler_arquivos(uploads: list[UploadFile] | None) -> list[Arquivo]:
    # Formulários sem arquivo chegam com uma parte vazia
    return [await ler_arquivo(u) for u in uploads or [] if u.filename]


def validar_form(schema: type[BaseModel], **campos) -> BaseModel:
    """Valida campos de formulário multipart com um schema pydantic."""
    try:
        return schema(**campos)
    except PydanticValidationError as e:
        erro = e.errors()[0]
        campo = ".".join(str(p) for p in erro.get("loc", ()))
        raise ValidationError(erro.get("msg", "Dados inválidos"), field=campo or None)
