"""
Generators.

Rules enforcement and persona-voiced script generation.
"""
from .rules_engine import (
    RulesConfig,
    RulesEngine,
    create_rules_engine,
    merge_rules_config,
    validate_content,
)
from .script_generator import (
    GenerationConfig,
    ScriptGenerator,
    create_script_generator,
    generate_persona_script,
)

__all__ = [
    "RulesConfig",
    "RulesEngine",
    "create_rules_engine",
    "merge_rules_config",
    "validate_content",
    "GenerationConfig",
    "ScriptGenerator",
    "create_script_generator",
    "generate_persona_script",
]
