"""Rules engine: catalog, stat mapping, creation and normalization.

Example:
    >>> from atlas_cortex.engine import creation_engine_for, normalize_character
    >>> session = creation_engine_for("tactical")
    >>> session.adjust_stat("vitality", 5)
    True
    >>> hero = session.finalize("Kai", strict=False)
    >>> normalize_character(hero, session.schema).resource("Health").max
    150.0
"""

from __future__ import annotations

from atlas_cortex.engine.catalog import (
    BUILTIN_ENGINE_DOCUMENTS,
    EngineCatalog,
    clear_catalog_cache,
    get_catalog,
    load_engine_schema,
)
from atlas_cortex.engine.creation import (
    CreationEngine,
    CreationValidation,
    ResourceDeriver,
    default_field_value,
    points_spent,
)
from atlas_cortex.engine.normalizer import Normalizer, normalize_character
from atlas_cortex.engine.stat_mapper import (
    STAT_MAPPINGS,
    StatMapping,
    calculate_modifier,
    coerce_number,
    get_stat_value,
    get_world_stat_context,
    map_stat,
    mapped_names,
)
from atlas_cortex.engine.world_creation import (
    CLASS_EQUIPMENT,
    STARTING_ESSENCES,
    create_classic_character,
    create_outworlder_character,
    create_tactical_character,
    creation_engine_for,
    get_resource_deriver,
)


__all__ = [
    # Catalog
    "BUILTIN_ENGINE_DOCUMENTS",
    "EngineCatalog",
    "get_catalog",
    "clear_catalog_cache",
    "load_engine_schema",
    # Stat mapper
    "StatMapping",
    "STAT_MAPPINGS",
    "map_stat",
    "get_stat_value",
    "calculate_modifier",
    "coerce_number",
    "mapped_names",
    "get_world_stat_context",
    # Creation
    "CreationEngine",
    "CreationValidation",
    "ResourceDeriver",
    "default_field_value",
    "points_spent",
    # World creation
    "CLASS_EQUIPMENT",
    "STARTING_ESSENCES",
    "get_resource_deriver",
    "creation_engine_for",
    "create_classic_character",
    "create_outworlder_character",
    "create_tactical_character",
    # Normalizer
    "Normalizer",
    "normalize_character",
]
