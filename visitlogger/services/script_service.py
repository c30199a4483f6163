"""
Emisión de scripts de seguimiento.
"""
import logging

from ..errors import MissingFields
from ..schemas.tracking_script_schema import ScriptRequest
from . import snippet_service
from .document_store import DocumentStore, unique_id

logger = logging.getLogger(__name__)


def issue_script(store: DocumentStore, collection: str, base_url: str, payload: ScriptRequest) -> dict:
    """
    Crea un TrackingScript con un scriptId nuevo.
    No se valida unicidad de scriptName: un usuario puede repetir nombres.
    """
    if not payload.userId or not payload.scriptName:
        raise MissingFields("userId and scriptName are required")

    script_id = unique_id()
    url = snippet_service.script_url(base_url, script_id, payload.userId)
    inline = None
    if payload.inline:
        inline = snippet_service.render_inline_tag(base_url, script_id, payload.userId)

    document = store.create_document(
        collection,
        {
            "scriptId": script_id,
            "userId": payload.userId,
            "scriptName": payload.scriptName,
            "scriptUrl": url,
            "script": inline,
        },
        document_id=script_id,
    )
    logger.info(f"Script creado: {script_id} ({payload.scriptName}) para usuario {payload.userId}")
    return document
