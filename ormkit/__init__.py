"""SQL fragment helpers, table event hooks and template-driven generation of model, entity and DAO sources."""

__version__ = "0.1.0"

__all__ = [
    "collect",
    "dao_gen",
    "entity_gen",
    "events",
    "fields",
    "genutils",
    "model_gen",
    "stubs",
    "table_name",
]