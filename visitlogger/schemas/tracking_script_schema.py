from typing import Optional

from pydantic import BaseModel


class ScriptRequest(BaseModel):
    userId: Optional[str] = None
    scriptName: Optional[str] = None
    # Si es True se devuelve el snippet completo en lugar de la URL
    inline: bool = False


class ScriptOut(BaseModel):
    scriptUrl: Optional[str] = None
    script: Optional[str] = None
    scriptId: str
    scriptName: str
    userId: str
