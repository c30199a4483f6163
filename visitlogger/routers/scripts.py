from fastapi import APIRouter, Depends

from ..config import Settings
from ..deps import get_app_settings, get_store
from ..schemas.tracking_script_schema import ScriptOut, ScriptRequest
from ..services.document_store import DocumentStore
from ..services.script_service import issue_script

router = APIRouter(tags=["scripts"])


@router.post("/script", response_model=ScriptOut, response_model_exclude_none=True)
def create_script(
    payload: ScriptRequest,
    store: DocumentStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
):
    """
    Crea un script de seguimiento nuevo.

    - Responde con scriptUrl, o con el snippet completo en `script` si inline=true.
    - Dos llamadas con el mismo userId/scriptName generan dos scripts distintos.
    """
    document = issue_script(store, settings.scripts_collection, settings.public_base_url, payload)
    return ScriptOut(
        scriptUrl=None if payload.inline else document["scriptUrl"],
        script=document["script"],
        scriptId=document["scriptId"],
        scriptName=document["scriptName"],
        userId=document["userId"],
    )
