"""
Pydantic Models and Schemas
===========================

Data models shared by the generator, the output kinds and the backends.
"""

from typing import Any, Dict
from enum import Enum
import uuid

from pydantic import BaseModel, ConfigDict, Field


# Option name -> value (bool, str, number, or a pair of ints for dimensions)
OptionSet = Dict[str, Any]


class OutputFormat(str, Enum):
    """Formats produced by the output kinds."""
    PDF = "pdf"
    PNG = "png"


class InputKind(str, Enum):
    """How the input document reaches the browser."""
    FILE = "file"
    HTML = "html"


class BaseIdentified(BaseModel):
    """Base model with ID field."""
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))


class GenerationRequest(BaseIdentified):
    """A single generation handed over to a backend."""
    input_kind: InputKind = Field(..., description="File path or inline HTML input")
    input_uri: str = Field(..., min_length=1, description="file:// or data:text/html URI")
    output_path: str = Field(..., min_length=1, description="Path of the output file")
    output_format: OutputFormat = Field(..., description="Output format")
    options: OptionSet = Field(default_factory=dict, description="Effective options")

    model_config = ConfigDict(frozen=True)

    def log_context(self) -> Dict[str, Any]:
        """Fields worth binding to log records."""
        return {
            "request_id": self.id,
            "input_kind": self.input_kind.value,
            "output_path": self.output_path,
            "output_format": self.output_format.value,
        }
