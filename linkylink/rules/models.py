from pydantic import BaseModel, Field, field_validator


class AppRules(BaseModel):
    name: str
    mount_prefix: str
    link_prefix: str = "go/"

    @field_validator("mount_prefix")
    @classmethod
    def _normalize_prefix(cls, value: str) -> str:
        value = "/" + value.strip("/")
        return "" if value == "/" else value

class ApiRules(BaseModel):
    prefix: str = "/api"

class StorageRules(BaseModel):
    token_key: str
    user_key: str

class RangeRule(BaseModel):
    min: int
    max: int

class RegexRule(RangeRule):
    pattern: str

class MaxRule(BaseModel):
    max: int

class ValidationRules(BaseModel):
    keyword: RegexRule
    username: RangeRule
    password: RangeRule
    description: MaxRule
    reserved_keywords: list[str] = Field(default_factory=list)

class MessageRules(BaseModel):
    success_dismiss_seconds: float = 3

class Rules(BaseModel):
    app: AppRules
    api: ApiRules
    storage: StorageRules
    validation: ValidationRules
    messages: MessageRules
