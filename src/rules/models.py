import logging

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.components.redirect.models import RiskLevel


class AnnotationRules(BaseModel):
    prefix: str = "nginx.ingress.kubernetes.io"
    max_risk: str = "Critical"

    @field_validator("prefix")
    @classmethod
    def check_prefix(cls, value: str) -> str:
        value = value.strip()
        if not value or value.endswith("/"):
            raise ValueError("prefix must be non-empty and must not end with '/'")
        return value

    @field_validator("max_risk")
    @classmethod
    def check_risk(cls, value: str) -> str:
        try:
            RiskLevel.from_name(value)
        except KeyError as e:
            allowed = ", ".join(level.name.title() for level in RiskLevel)
            raise ValueError(f"max_risk must be one of: {allowed}") from e
        return value

    @property
    def risk_level(self) -> RiskLevel:
        return RiskLevel.from_name(self.max_risk)


class LoggingRules(BaseModel):
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    @field_validator("level")
    @classmethod
    def check_level(cls, value: str) -> str:
        value = value.strip().upper()
        if value not in logging.getLevelNamesMapping():
            allowed = ", ".join(sorted(logging.getLevelNamesMapping()))
            raise ValueError(f"level must be one of: {allowed}")
        return value


class Rules(BaseModel):
    annotations: AnnotationRules = Field(default_factory=AnnotationRules)
    logging: LoggingRules = Field(default_factory=LoggingRules)

    model_config = ConfigDict(extra="forbid")
