# ============================================================================
# CLAUDE CONTEXT - CORE MODELS - CONTEXT
# ============================================================================
# STATUS: Core models - Inbound/outbound message context
# PURPOSE: Property bag the host fills before the operation and reads after it
# EXPORTS: MessageContext
# INTERFACES: Pydantic BaseModel
# PYDANTIC_MODELS: MessageContext
# DEPENDENCIES: pydantic, typing
# SCOPE: Host adapter data model
# PATTERNS: Data model pattern, no business logic
# ENTRY_POINTS: from core.models.context import MessageContext
# ============================================================================

"""
Pure data model for the message context.

The host places the operation's parameters on the context as named
properties; the operation writes error properties and the result payload
back onto it. No business logic - just data structures.
"""

from typing import Dict, Any, Optional
from pydantic import BaseModel, ConfigDict, Field

from core.errors import ErrorDescriptor
from .results import ResultPayload


class MessageContext(BaseModel):
    """
    Mutable property bag exchanged between host and operation.

    Properties are read by name (containerName, fileName, ...). The payload
    is attached exactly once per operation.
    """

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    properties: Dict[str, Any] = Field(default_factory=dict, description="Named context properties")
    payload: Optional[ResultPayload] = Field(default=None, description="Result payload for the caller")
    error: Optional[ErrorDescriptor] = Field(default=None, description="Error descriptor on failure")

    def get_property(self, name: str, default: Any = None) -> Any:
        return self.properties.get(name, default)

    def set_property(self, name: str, value: Any) -> None:
        self.properties[name] = value
