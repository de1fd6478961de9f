"""Project configuration record."""

from pydantic import BaseModel, ConfigDict, Field


class ProjectConfig(BaseModel):
    """Contents of meshstack.yaml.

    All four fields are required and must be non-empty.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", str_strip_whitespace=True)

    project_name: str = Field(min_length=1)
    language: str = Field(min_length=1)
    service_mesh: str = Field(min_length=1)
    ci_cd: str = Field(min_length=1)
