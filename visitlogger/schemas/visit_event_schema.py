from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class TrackRequest(BaseModel):
    """
    Beacon enviado por el snippet. Todos los campos se aceptan como opcionales
    para poder responder 400 con el mensaje propio cuando falta alguno.
    Los opcionales se reciben tal cual (número, texto, bool) y se convierten
    a texto recién al normalizar, después de aplicar los valores por defecto.
    """
    model_config = ConfigDict(coerce_numbers_to_str=True)

    scriptId: Optional[str] = None
    userId: Optional[str] = None
    ipAddress: Optional[str] = None
    timestamp: Optional[str] = None
    userAgent: Optional[str] = None
    timeSpent: Any = None
    city: Any = None
    latitude: Any = None
    longitude: Any = None
    pageViews: Any = None


class TrackResponse(BaseModel):
    message: str


class VisitEventOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="$id")
    createdAt: str = Field(alias="$createdAt")
    scriptId: str
    userId: str
    ipAddress: str
    timestamp: str
    userAgent: str
    timeSpent: str
    city: str
    latitude: str
    longitude: str
    pageViews: str


class AnalyticsPage(BaseModel):
    documents: List[VisitEventOut]
    total: int
    page: int
    limit: int


class GraphPoint(BaseModel):
    date: str
    count: int


class GraphResponse(BaseModel):
    graphData: List[GraphPoint]
