#Description: Pydantic schemas for OKX credentials, requests and response envelopes.

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator
from pydantic.alias_generators import to_camel
from typing import Any, Literal, Optional

Method = Literal["GET", "POST", "PUT", "DELETE"]

class Credentials(BaseModel):
    """API key set for one transport. Secrets stay masked in repr and dumps."""
    model_config = ConfigDict(frozen=True)

    api_key: str = Field(min_length=1)
    secret_key: SecretStr
    passphrase: SecretStr
    project_id: str = Field(min_length=1)

    @field_validator("secret_key", "passphrase")
    @classmethod
    def _not_empty(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value():
            raise ValueError("must not be empty")
        return v

class RequestSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    method: Method
    path: str
    query: Optional[dict[str, Any]] = None
    body: Any = None

class ResponseEnvelope(BaseModel):
    # kept as received: only the exact string "0" means success, a numeric 0 does not
    code: Any
    msg: str = ""
    data: Any = None

    @field_validator("msg", mode="before")
    @classmethod
    def _msg_or_empty(cls, v):
        if v is None:
            return ""
        return v if isinstance(v, str) else str(v)

    @property
    def ok(self) -> bool:
        return self.code == "0"

class RawPayload(BaseModel):
    value: Any = None

def decode_payload(parsed: Any) -> ResponseEnvelope | RawPayload:
    """Tag a decoded JSON body: objects carrying `code` are envelopes, the rest is raw data."""
    if isinstance(parsed, dict) and "code" in parsed:
        return ResponseEnvelope.model_validate(parsed)
    return RawPayload(value=parsed)

class TokenAddress(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    chain_index: str
    token_contract_address: str
