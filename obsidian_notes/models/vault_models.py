"""Input models for choosing which configured vault a session works in."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class ListVaultsInput(BaseModel):
    """Input model for list_vaults tool.

    Examples:
        >>> ListVaultsInput()
        >>> ListVaultsInput(include_analysis=True)
    """

    include_analysis: bool = Field(
        False,
        description=(
            "If True, also report the scan caps, worker count, and read timeout "
            "applied to vault-wide analyses (broken links, orphans, tag census, search)."
        )
    )

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {},
                {"include_analysis": True},
            ]
        }


class SetActiveVaultInput(BaseModel):
    """Input model for set_active_vault tool.

    Vault names are the keys under ``vaults:`` in the configuration file, not
    filesystem paths.

    Examples:
        >>> SetActiveVaultInput(vault="research")
    """

    vault: str = Field(
        min_length=1,
        description=(
            "Configured vault key, e.g. 'research' or 'journal'. "
            "Call list_vaults() first when unsure which keys exist."
        ),
        examples=["research", "journal"]
    )

    @field_validator('vault')
    @classmethod
    def validate_vault(cls, v: str) -> str:
        """Trim the name and reject blanks and filesystem paths."""
        name = v.strip()
        if not name:
            raise ValueError("Vault name cannot be blank; pass a key returned by list_vaults().")
        if "/" in name or "\\" in name:
            raise ValueError(
                f"'{name}' looks like a path. Pass the vault's configured name, "
                "not its location on disk."
            )
        return name

    class Config:
        """Pydantic model configuration."""
        json_schema_extra = {
            "examples": [
                {"vault": "research"},
                {"vault": "journal"},
            ]
        }
