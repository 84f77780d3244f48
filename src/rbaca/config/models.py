from typing import Literal

from pydantic import BaseModel, Field


class AttributeSettings(BaseModel):
    # deny: unknown attributes fail; skip: treated as absent; raise: fatal
    missing: Literal["deny", "skip", "raise"] = "deny"


class PluginsConfig(BaseModel):
    providers: list[str] = Field(default_factory=list)


class RBACConfig(BaseModel):
    attributes: AttributeSettings = Field(default_factory=AttributeSettings)
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)
    rules_file: str | None = None
