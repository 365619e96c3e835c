from pydantic import BaseModel


class HealthStatus(BaseModel):
    status: str
    database: str


class HealthResponse(BaseModel):
    success: bool = True
    result: HealthStatus
