"""RPC Message Base — shared pydantic config for request/response messages.

Invariants:
    - JSON field names are camelCase; snake_case accepted on input
    - Unknown request fields are ignored (forward compatible, like protobuf JSON)
    - Ids are int64; out-of-range values fail validation (INVALID_ARGUMENT)
"""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Int64 = Annotated[int, Field(ge=-2**63, le=2**63 - 1)]


class RpcMessage(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore",
    )


class Empty(RpcMessage):
    """Empty response body."""
    pass
