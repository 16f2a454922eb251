from typing import Optional

from pydantic import BaseModel


class SuccessResponse(BaseModel):
    sucesso: bool = True
    mensagem: Optional[str] = None


class ErrorResponse(BaseModel):
    sucesso: bool = False
    mensagem: str
