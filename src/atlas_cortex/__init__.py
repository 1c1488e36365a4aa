"""Atlas Cortex - rules core for multi-world narrative role-play.

One AI backend and one display surface serve several interchangeable
world modules (rule systems), each with its own stats, resources and
progression model.

ARCHITECTURE:
- An EngineSchema describes a rule system as data
- The CreationEngine builds a valid character from a schema, enforcing
  the stat point budget
- The stat mapper translates rule-agnostic stat names to world fields
- The Normalizer projects any world's character onto one view

Example:
    >>> from atlas_cortex import creation_engine_for, normalize_character
    >>>
    >>> session = creation_engine_for("classic")
    >>> session.adjust_stat("CON", 4)
    True
    >>> session.set_field("class", "fighter")
    'fighter'
    >>> session.set_field("race", "dwarf")
    'dwarf'
    >>> hero = session.finalize("Thorin")
    >>> view = normalize_character(hero, session.schema)
    >>> view.stat("CON").modifier
    2

Modules:
    core: Configuration, logging, and base exceptions.
    models: Pydantic V2 schemas (engine schema, characters, view).
    engine: Catalog, stat mapper, creation engine and normalizer.
    data: Static game data (essences).
    sharing: Share codes and character import/export.
"""

from __future__ import annotations

# Core
from atlas_cortex.core.config import Settings, get_settings
from atlas_cortex.core.exceptions import AtlasCortexError
from atlas_cortex.core.logging import configure_logging, get_logger

# Models
from atlas_cortex.models import (
    EngineSchema,
    GenericCharacter,
    UnifiedCharacterView,
    parse_character,
)

# Engine
from atlas_cortex.engine import (
    CreationEngine,
    Normalizer,
    calculate_modifier,
    creation_engine_for,
    get_stat_value,
    load_engine_schema,
    map_stat,
    normalize_character,
)

# Sharing
from atlas_cortex.sharing import generate_share_code, parse_share_code


__version__ = "0.1.0"
__author__ = "Atlas Cortex Team"
__all__ = [
    # Version info
    "__version__",
    "__author__",
    # Core
    "AtlasCortexError",
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    # Models
    "EngineSchema",
    "GenericCharacter",
    "UnifiedCharacterView",
    "parse_character",
    # Engine
    "load_engine_schema",
    "map_stat",
    "get_stat_value",
    "calculate_modifier",
    "CreationEngine",
    "creation_engine_for",
    "Normalizer",
    "normalize_character",
    # Sharing
    "generate_share_code",
    "parse_share_code",
]
