from pydantic import BaseModel, ConfigDict, Field


class ServicesStatus(BaseModel):
    """Availability of the external collaborators."""

    database: str = Field(description="Document store reachability")
    ai_client: str = Field(description="Generative content service configuration")
    image_storage: str = Field(description="Image host configuration")


class HealthCheckResponse(BaseModel):
    """Health check response model."""

    model_config = ConfigDict(ser_json_timedelta="iso8601")

    version: str = Field(description="API version")
    status: str = Field(description="Overall health status")
    timestamp: str = Field(description="Current timestamp")
    services: ServicesStatus = Field(description="Status of dependent services")
