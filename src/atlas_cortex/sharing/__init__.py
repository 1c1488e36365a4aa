"""Share codes and character import/export.

Exports:
    generate_share_code / parse_share_code: Compact share codes.
    parse_character_json / validate_import: Pasted character import.
    export_campaign_save: Portable campaign snapshot.
"""

from __future__ import annotations

from atlas_cortex.sharing.character_io import (
    CampaignSaveData,
    CharacterImportResult,
    CharacterTemplate,
    ImportValidation,
    export_campaign_save,
    generate_template,
    get_template_for_world,
    parse_character_json,
    validate_import,
)
from atlas_cortex.sharing.share_code import (
    ParseCodeResult,
    ShareableData,
    ShareCodeResult,
    estimate_code_size,
    generate_share_code,
    is_valid_share_code_format,
    parse_share_code,
)


__all__ = [
    # Share codes
    "ShareableData",
    "ShareCodeResult",
    "ParseCodeResult",
    "generate_share_code",
    "parse_share_code",
    "estimate_code_size",
    "is_valid_share_code_format",
    # Import / export
    "CharacterTemplate",
    "ImportValidation",
    "CharacterImportResult",
    "CampaignSaveData",
    "get_template_for_world",
    "generate_template",
    "validate_import",
    "parse_character_json",
    "export_campaign_save",
]
