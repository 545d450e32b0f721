"""
Wire models for Coolify API resources.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator


class CoolifyModel(BaseModel):
    """Base for all upstream payloads.

    Unknown fields are ignored and ``null`` values fall back to the field
    default, since different Coolify versions omit or null out fields freely.
    """

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class Application(CoolifyModel):
    id: int = 0
    uuid: str = ""
    name: str = ""
    fqdn: str = ""
    status: str = ""


class ApplicationDetail(CoolifyModel):
    id: int = 0
    uuid: str = ""
    name: str = ""
    fqdn: str = ""
    status: str = ""
    description: str = ""
    git_repository: str = ""
    git_branch: str = ""
    docker_registry_image_name: str = ""
    dockerfile: str = ""
    build_pack: str = ""
    created_at: str = ""
    updated_at: str = ""
    environment: str = ""


class ApplicationLogs(CoolifyModel):
    logs: str = ""


class EnvironmentVariable(CoolifyModel):
    id: int = 0
    uuid: str = ""
    resourceable_type: str = ""
    resourceable_id: int = 0
    is_build_time: bool = False
    is_literal: bool = False
    is_multiline: bool = False
    is_preview: bool = False
    is_shared: bool = False
    is_shown_once: bool = False
    key: str = ""
    value: str = ""
    real_value: str = ""
    version: str = ""
    created_at: str = ""
    updated_at: str = ""


class StartDeploymentResponse(CoolifyModel):
    message: str = ""
    deployment_uuid: str = ""


class MessageResponse(CoolifyModel):
    """Acknowledgement returned by action endpoints."""

    message: str = ""


class StopResponse(MessageResponse):
    pass


class DeleteResponse(MessageResponse):
    pass


class Deployment(CoolifyModel):
    uuid: str = ""
    status: str = ""
    commit: str = ""
    branch: str = ""
    commit_message: str = ""
    type: str = ""
    created_at: str = ""
    updated_at: str = ""
    application_id: int = 0
    application: str = ""


class Environment(CoolifyModel):
    id: int = 0
    uuid: str = ""
    name: str = ""
    description: str = ""
    project_id: int = 0
    created_at: str = ""
    updated_at: str = ""


class Database(CoolifyModel):
    id: int = 0
    uuid: str = ""
    name: str = ""
    status: str = ""
    type: str = ""
    host: str = ""
    port: str = ""
    created_at: str = ""
    updated_at: str = ""
