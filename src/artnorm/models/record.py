"""Raw input record model for artnorm."""

from typing import Any

from pydantic import BaseModel, Field


class RawRecord(BaseModel):
    """One extractor output record awaiting normalization.

    Structured extractors (LECmd, JLECmd, PECmd, MFTECmd) deliver a mapping
    in `data`; syslog delivers the raw text line.
    """

    path: str = Field(
        default="",
        description="Path of the artifact file the record was extracted from",
    )

    plugin: str | None = Field(
        default=None,
        description="Extractor plugin name (lecmd, jlecmd, pecmd, mftecmd)",
    )

    type: str | None = Field(
        default=None,
        description="Classifier type tag or MIME type (e.g., application/syslog)",
    )

    data: dict[str, Any] | str | None = Field(
        default=None,
        description="Extracted fields, or the raw line for text artifacts",
    )

    model_config = {"extra": "allow", "frozen": True}

    @property
    def tag(self) -> str | None:
        """Discriminator used in log messages."""
        return self.plugin or self.type

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dictionary, keeping extra input keys."""
        return self.model_dump(mode="json")
